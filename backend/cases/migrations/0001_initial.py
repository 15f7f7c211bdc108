import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agencies", "0001_initial"),
        ("firs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("case_no", models.CharField(editable=False, max_length=50, unique=True, verbose_name="Case Number")),
                ("year", models.PositiveSmallIntegerField(editable=False, verbose_name="Year")),
                ("sequence", models.PositiveIntegerField(editable=False, verbose_name="Sequence")),
                ("case_type", models.CharField(default="Traffic Violation", max_length=100, verbose_name="Case Type")),
                ("case_status", models.CharField(
                    choices=[
                        ("Pending", "Pending"),
                        ("In Progress", "In Progress"),
                        ("Convicted", "Convicted"),
                        ("Acquitted", "Acquitted"),
                        ("Dismissed", "Dismissed"),
                        ("Closed", "Closed"),
                    ],
                    db_index=True,
                    default="Pending",
                    max_length=20,
                    verbose_name="Status",
                )),
                ("hearing_date", models.DateTimeField(verbose_name="Hearing Date")),
                ("verdict", models.TextField(blank=True, null=True, verbose_name="Verdict")),
                ("court", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="cases",
                    to="agencies.court",
                    verbose_name="Court",
                )),
                ("fir", models.OneToOneField(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="case",
                    to="firs.fir",
                    verbose_name="FIR",
                )),
                ("judge", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="cases",
                    to="agencies.judge",
                    verbose_name="Presiding Judge",
                )),
            ],
            options={
                "verbose_name": "Case",
                "verbose_name_plural": "Cases",
                "ordering": ["-created_at"],
                "permissions": [
                    ("can_create_case", "Open court cases from FIRs"),
                    ("can_assign_judge", "Assign the presiding judge"),
                    ("can_update_case", "Update case status, hearing date and verdict"),
                    ("can_record_statement", "Record statements on assigned cases"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("court", "year", "sequence"),
                        name="unique_case_sequence_per_court_year",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CaseStatement",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("statement_by", models.CharField(max_length=255, verbose_name="Statement By")),
                ("statement_text", models.TextField(verbose_name="Statement")),
                ("statement_date", models.DateTimeField(verbose_name="Statement Date")),
                ("case", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="statements",
                    to="cases.case",
                    verbose_name="Case",
                )),
            ],
            options={
                "verbose_name": "Case Statement",
                "verbose_name_plural": "Case Statements",
                "ordering": ["statement_date"],
            },
        ),
    ]
