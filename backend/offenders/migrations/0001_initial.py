import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Accused",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("cnic", models.CharField(
                    help_text="National identity number, stored as XXXXX-XXXXXXX-X.",
                    max_length=15,
                    unique=True,
                    verbose_name="CNIC",
                )),
                ("full_name", models.CharField(max_length=255, verbose_name="Full Name")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="Email")),
                ("contact", models.CharField(blank=True, default="", max_length=20, verbose_name="Contact Number")),
                ("address", models.TextField(blank=True, default="", verbose_name="Address")),
                ("city", models.CharField(blank=True, default="", max_length=100, verbose_name="City")),
                ("province", models.CharField(blank=True, default="", max_length=100, verbose_name="Province")),
            ],
            options={
                "verbose_name": "Accused",
                "verbose_name_plural": "Accused Persons",
                "ordering": ["full_name"],
                "permissions": [
                    ("can_register_accused", "Register accused persons"),
                    ("can_update_accused", "Update accused contact details"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("plate_number", models.CharField(max_length=20, unique=True, verbose_name="Plate Number")),
                ("make", models.CharField(blank=True, default="", max_length=100, verbose_name="Make")),
                ("color", models.CharField(blank=True, default="", max_length=50, verbose_name="Colour")),
                ("chassis_no", models.CharField(blank=True, default="", max_length=50, verbose_name="Chassis No.")),
                ("engine_no", models.CharField(blank=True, default="", max_length=50, verbose_name="Engine No.")),
                ("registration_year", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Registration Year")),
                ("owner", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="vehicles",
                    to="offenders.accused",
                    verbose_name="Owner",
                )),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["plate_number"],
            },
        ),
    ]
