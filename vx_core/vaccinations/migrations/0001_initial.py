import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("parents", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="VaccinationGuideline",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country_code", models.CharField(db_index=True, max_length=2)),
                ("region_code", models.CharField(blank=True, default="", max_length=16)),
                ("vaccine_code", models.CharField(max_length=32)),
                ("vaccine_name", models.CharField(max_length=255)),
                ("recommended_age_months", models.PositiveSmallIntegerField()),
                ("min_age_months", models.PositiveSmallIntegerField(default=0)),
                ("max_age_months", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("dose_number", models.PositiveSmallIntegerField(default=1)),
                ("total_doses", models.PositiveSmallIntegerField(default=1)),
                ("is_mandatory", models.BooleanField(default=True)),
                ("contraindications", models.JSONField(blank=True, default=list)),
                ("notes", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "vaccinations_guideline",
                "indexes": [
                    models.Index(
                        fields=["country_code", "is_active", "recommended_age_months"],
                        name="vx_guideline_lookup_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("country_code", "region_code", "vaccine_code", "dose_number"),
                        name="uq_guideline_country_region_code_dose",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="VaccinationScheduleEntry",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("vaccine_code", models.CharField(max_length=32)),
                ("vaccine_name", models.CharField(max_length=255)),
                ("dose_number", models.PositiveSmallIntegerField(default=1)),
                ("total_doses", models.PositiveSmallIntegerField(default=1)),
                ("due_date", models.DateField(db_index=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("upcoming", "Upcoming"),
                            ("due", "Due"),
                            ("overdue", "Overdue"),
                            ("completed", "Completed"),
                        ],
                        db_index=True,
                        default="upcoming",
                        max_length=16,
                    ),
                ),
                ("is_mandatory", models.BooleanField(default=True)),
                ("notes", models.TextField(blank=True)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="schedule_entries",
                        to="parents.child",
                    ),
                ),
            ],
            options={
                "db_table": "vaccinations_schedule_entry",
                "indexes": [
                    models.Index(fields=["child", "due_date"], name="vx_schedule_child_due_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("child", "vaccine_code", "dose_number"),
                        name="uq_schedule_child_code_dose",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="VaccinationRecord",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("vaccine_code", models.CharField(max_length=32)),
                ("vaccine_name", models.CharField(max_length=255)),
                ("dose_number", models.PositiveSmallIntegerField(default=1)),
                ("vaccination_date", models.DateField()),
                ("administered_by", models.CharField(blank=True, max_length=255)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("batch_number", models.CharField(blank=True, max_length=64)),
                ("notes", models.TextField(blank=True)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vaccination_records",
                        to="parents.child",
                    ),
                ),
            ],
            options={
                "db_table": "vaccinations_record",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("child", "vaccine_code", "dose_number"),
                        name="uq_record_child_code_dose",
                    ),
                ],
            },
        ),
    ]
