import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agencies", "0001_initial"),
        ("challans", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Fir",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("fir_no", models.CharField(editable=False, max_length=50, unique=True, verbose_name="FIR Number")),
                ("year", models.PositiveSmallIntegerField(editable=False, verbose_name="Year")),
                ("sequence", models.PositiveIntegerField(editable=False, verbose_name="Sequence")),
                ("date_filed", models.DateTimeField(verbose_name="Date Filed")),
                ("status", models.CharField(
                    choices=[
                        ("Filed", "Filed"),
                        ("Under Investigation", "Under Investigation"),
                        ("Closed", "Closed"),
                    ],
                    db_index=True,
                    default="Filed",
                    max_length=25,
                    verbose_name="Status",
                )),
                ("description", models.TextField(blank=True, default="", verbose_name="Description")),
                ("investigation_report", models.TextField(blank=True, default="", verbose_name="Investigation Report")),
                ("challan", models.OneToOneField(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="fir",
                    to="challans.challan",
                    verbose_name="Challan",
                )),
                ("informant", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="informed_firs",
                    to="agencies.policeofficer",
                    verbose_name="Informant",
                )),
                ("station", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="firs",
                    to="agencies.policestation",
                    verbose_name="Police Station",
                )),
            ],
            options={
                "verbose_name": "FIR",
                "verbose_name_plural": "FIRs",
                "ordering": ["-date_filed"],
                "permissions": [
                    ("can_file_fir", "Escalate cognizable challans to FIRs"),
                    ("can_update_fir", "Update FIR status and investigation report"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("station", "year", "sequence"),
                        name="unique_fir_sequence_per_station_year",
                    ),
                ],
            },
        ),
    ]
