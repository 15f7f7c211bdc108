from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PublicStatusOtp",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("vehicle_no", models.CharField(max_length=20, verbose_name="Vehicle Number")),
                ("cnic", models.CharField(db_index=True, max_length=15, verbose_name="CNIC")),
                ("email", models.EmailField(max_length=254, verbose_name="Email")),
                ("otp_code", models.CharField(max_length=6, verbose_name="OTP Code")),
                ("expires_at", models.DateTimeField(verbose_name="OTP Expires At")),
                ("is_verified", models.BooleanField(default=False, verbose_name="Verified")),
                ("verified_at", models.DateTimeField(blank=True, null=True, verbose_name="Verified At")),
                ("access_token", models.CharField(
                    blank=True, max_length=64, null=True, unique=True, verbose_name="Access Token",
                )),
                ("access_token_expires_at", models.DateTimeField(
                    blank=True, null=True, verbose_name="Access Token Expires At",
                )),
            ],
            options={
                "verbose_name": "Public Status OTP",
                "verbose_name_plural": "Public Status OTPs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["vehicle_no", "cnic", "email"], name="public_otp_lookup_idx"),
                ],
            },
        ),
    ]
