import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("agencies", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="IotDevice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("device_name", models.CharField(
                    help_text="Unique identifier printed on the device, e.g. 'IOT-01'.",
                    max_length=100,
                    unique=True,
                    verbose_name="Device Name",
                )),
                ("firmware_version", models.CharField(blank=True, default="", max_length=50, verbose_name="Firmware Version")),
                ("calibration_date", models.DateField(blank=True, null=True, verbose_name="Calibration Date")),
                ("calibration_status", models.BooleanField(default=False, verbose_name="Calibrated")),
                ("calibration_certificate_no", models.CharField(
                    blank=True, default="", max_length=100, verbose_name="Calibration Certificate No.",
                )),
                ("is_registered", models.BooleanField(default=True, verbose_name="Registered")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("pairing_datetime", models.DateTimeField(blank=True, null=True, verbose_name="Paired At")),
                ("paired_officer", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="paired_devices",
                    to="agencies.policeofficer",
                    verbose_name="Paired Officer",
                )),
            ],
            options={
                "verbose_name": "IoT Device",
                "verbose_name_plural": "IoT Devices",
                "ordering": ["device_name"],
                "permissions": [("can_manage_iot_devices", "Register, calibrate and pair IoT devices")],
            },
        ),
        migrations.CreateModel(
            name="EmissionReport",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("co", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="CO")),
                ("co2", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="CO2")),
                ("hc", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="HC")),
                ("nox", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="NOx")),
                ("sound_level_dba", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="Sound Level (dBA)")),
                ("test_datetime", models.DateTimeField(verbose_name="Test Date/Time")),
                ("ml_classification", models.CharField(blank=True, default="", max_length=100, verbose_name="ML Classification")),
                ("digital_signature", models.CharField(
                    editable=False,
                    help_text="Base64 SHA-256 over the canonical reading string.",
                    max_length=64,
                    verbose_name="Digital Signature",
                )),
                ("device", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="emission_reports",
                    to="evidence.iotdevice",
                    verbose_name="Device",
                )),
            ],
            options={
                "verbose_name": "Emission Report",
                "verbose_name_plural": "Emission Reports",
                "ordering": ["-test_datetime"],
                "permissions": [("can_record_emission_report", "Record signed emission readings")],
                "indexes": [
                    models.Index(fields=["device", "test_datetime"], name="emission_device_time_idx"),
                ],
            },
        ),
    ]
