from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DocumentSequence",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("scope", models.CharField(choices=[("fir", "FIR (per police station)"), ("case", "Case (per court)")], max_length=20, verbose_name="Scope")),
                ("scope_id", models.PositiveBigIntegerField(help_text="PK of the police station (FIR) or court (Case).", verbose_name="Scope Object ID")),
                ("year", models.PositiveSmallIntegerField(verbose_name="Year")),
                ("last_value", models.PositiveIntegerField(default=0, verbose_name="Last Issued Sequence")),
            ],
            options={
                "verbose_name": "Document Sequence",
                "verbose_name_plural": "Document Sequences",
                "ordering": ["scope", "scope_id", "-year"],
                "constraints": [
                    models.UniqueConstraint(fields=("scope", "scope_id", "year"), name="unique_document_sequence_per_scope_year"),
                ],
            },
        ),
    ]
