import uuid

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
            name="Patient",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("tenant_id", models.UUIDField(db_index=True)),
                ("full_name", models.CharField(max_length=255)),
                ("date_of_birth", models.DateField()),
                ("gender", models.CharField(blank=True, max_length=32)),
                ("parent_name", models.CharField(blank=True, max_length=255)),
                ("parent_phone", models.CharField(blank=True, max_length=32)),
                ("parent_email", models.EmailField(blank=True, max_length=254)),
                ("address", models.TextField(blank=True)),
                ("allergies", models.JSONField(blank=True, default=list)),
                ("medical_conditions", models.JSONField(blank=True, default=list)),
                ("emergency_contact", models.JSONField(blank=True, default=dict)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="patients_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "patients_patient",
                "indexes": [
                    models.Index(fields=["tenant_id", "full_name"], name="patients_tenant_name_idx"),
                    models.Index(fields=["tenant_id", "parent_phone"], name="patients_tenant_phone_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PatientVaccination",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("tenant_id", models.UUIDField(db_index=True)),
                ("vaccine_code", models.CharField(max_length=32)),
                ("vaccine_name", models.CharField(max_length=255)),
                ("dose_number", models.PositiveSmallIntegerField(default=1)),
                ("administered_on", models.DateField()),
                ("batch_number", models.CharField(blank=True, max_length=64)),
                ("notes", models.TextField(blank=True)),
                (
                    "administered_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="vaccinations_administered",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "patient",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="vaccinations",
                        to="patients.patient",
                    ),
                ),
            ],
            options={
                "db_table": "patients_patient_vaccination",
                "indexes": [
                    models.Index(fields=["tenant_id", "administered_on"], name="patients_vx_tenant_date_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("patient", "vaccine_code", "dose_number"),
                        name="uq_patient_vaccine_dose",
                    ),
                ],
            },
        ),
    ]
