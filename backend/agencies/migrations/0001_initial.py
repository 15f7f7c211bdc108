import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CourtType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Court Type")),
            ],
            options={
                "verbose_name": "Court Type",
                "verbose_name_plural": "Court Types",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="PoliceStation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=150, verbose_name="Station Name")),
                ("code", models.CharField(
                    help_text="Short code, e.g. 'TSB-01'. Non-alphanumerics are dropped in FIR numbers.",
                    max_length=20,
                    unique=True,
                    verbose_name="Station Code",
                )),
                ("location", models.CharField(blank=True, default="", max_length=255, verbose_name="Location")),
                ("district", models.CharField(blank=True, default="", max_length=100, verbose_name="District")),
                ("province", models.CharField(blank=True, default="", max_length=100, verbose_name="Province")),
                ("contact", models.CharField(blank=True, default="", max_length=50, verbose_name="Contact")),
            ],
            options={
                "verbose_name": "Police Station",
                "verbose_name_plural": "Police Stations",
                "ordering": ["name"],
                "permissions": [
                    ("can_manage_stations", "Register and edit police stations"),
                    ("can_manage_personnel", "Enrol police officers and judges"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Court",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("name", models.CharField(max_length=150, verbose_name="Court Name")),
                ("location", models.CharField(blank=True, default="", max_length=150, verbose_name="City / Location")),
                ("district", models.CharField(blank=True, default="", max_length=100, verbose_name="District")),
                ("province", models.CharField(blank=True, default="", max_length=100, verbose_name="Province")),
                ("court_type", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="courts",
                    to="agencies.courttype",
                    verbose_name="Court Type",
                )),
            ],
            options={
                "verbose_name": "Court",
                "verbose_name_plural": "Courts",
                "ordering": ["name"],
                "permissions": [("can_manage_courts", "Register courts and court types")],
            },
        ),
        migrations.CreateModel(
            name="Judge",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("cnic", models.CharField(max_length=15, unique=True, verbose_name="CNIC")),
                ("contact_no", models.CharField(blank=True, default="", max_length=20, verbose_name="Contact Number")),
                ("rank", models.CharField(blank=True, default="", max_length=50, verbose_name="Rank")),
                ("service_status", models.BooleanField(default=True, verbose_name="In Service")),
                ("court", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="judges",
                    to="agencies.court",
                    verbose_name="Court",
                )),
                ("user", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="judge",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="User Account",
                )),
            ],
            options={
                "verbose_name": "Judge",
                "verbose_name_plural": "Judges",
                "ordering": ["user__last_name", "user__first_name"],
            },
        ),
        migrations.CreateModel(
            name="PoliceOfficer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("cnic", models.CharField(max_length=15, unique=True, verbose_name="CNIC")),
                ("contact_no", models.CharField(blank=True, default="", max_length=20, verbose_name="Contact Number")),
                ("badge_number", models.CharField(max_length=30, unique=True, verbose_name="Badge Number")),
                ("rank", models.CharField(blank=True, default="", max_length=50, verbose_name="Rank")),
                ("is_investigation_officer", models.BooleanField(default=False, verbose_name="Investigation Officer")),
                ("posting_date", models.DateField(blank=True, null=True, verbose_name="Posting Date")),
                ("station", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="officers",
                    to="agencies.policestation",
                    verbose_name="Station",
                )),
                ("user", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="police_officer",
                    to=settings.AUTH_USER_MODEL,
                    verbose_name="User Account",
                )),
            ],
            options={
                "verbose_name": "Police Officer",
                "verbose_name_plural": "Police Officers",
                "ordering": ["badge_number"],
            },
        ),
    ]
