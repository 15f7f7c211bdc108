import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agencies", "0001_initial"),
        ("evidence", "0001_initial"),
        ("offenders", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Violation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("violation_type", models.CharField(max_length=100, unique=True, verbose_name="Violation Type")),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("penalty_amount", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Penalty Amount")),
                ("section_of_law", models.CharField(blank=True, default="", max_length=100, verbose_name="Section of Law")),
                ("is_cognizable", models.BooleanField(
                    default=False,
                    help_text="Only challans for cognizable violations may be escalated to an FIR.",
                    verbose_name="Cognizable",
                )),
            ],
            options={
                "verbose_name": "Violation",
                "verbose_name_plural": "Violations",
                "ordering": ["violation_type"],
                "permissions": [("can_manage_violations", "Maintain the violation reference table")],
            },
        ),
        migrations.CreateModel(
            name="Challan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("evidence_image", models.ImageField(
                    blank=True, null=True, upload_to="challans/evidence/%Y/%m/", verbose_name="Evidence Image",
                )),
                ("issue_datetime", models.DateTimeField(verbose_name="Issued At")),
                ("due_datetime", models.DateTimeField(verbose_name="Payment Due")),
                ("status", models.CharField(
                    choices=[("Unpaid", "Unpaid"), ("Paid", "Paid")],
                    db_index=True,
                    default="Unpaid",
                    max_length=10,
                    verbose_name="Status",
                )),
                ("bank_details", models.CharField(blank=True, default="", max_length=255, verbose_name="Bank Details")),
                ("digital_signature", models.CharField(
                    blank=True,
                    default="",
                    help_text="Copied from the linked emission report.",
                    max_length=64,
                    verbose_name="Digital Signature",
                )),
                ("accused", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="challans",
                    to="offenders.accused",
                    verbose_name="Accused",
                )),
                ("emission_report", models.OneToOneField(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="challan",
                    to="evidence.emissionreport",
                    verbose_name="Emission Report",
                )),
                ("officer", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="challans",
                    to="agencies.policeofficer",
                    verbose_name="Issuing Officer",
                )),
                ("vehicle", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="challans",
                    to="offenders.vehicle",
                    verbose_name="Vehicle",
                )),
                ("violation", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="challans",
                    to="challans.violation",
                    verbose_name="Violation",
                )),
            ],
            options={
                "verbose_name": "Challan",
                "verbose_name_plural": "Challans",
                "ordering": ["-issue_datetime"],
                "permissions": [("can_issue_challan", "Issue traffic challans")],
            },
        ),
    ]
