import datetime
import uuid

import django.db.models.deletion
from django.db import migrations, models

import vx_core.parents.models


class Migration(migrations.Migration):

    dependencies = [
        ("parents", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NotificationPreference",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email_enabled", models.BooleanField(default=True)),
                ("sms_enabled", models.BooleanField(default=False)),
                ("push_enabled", models.BooleanField(default=True)),
                (
                    "reminder_days_before",
                    models.PositiveSmallIntegerField(default=vx_core.parents.models.default_reminder_days),
                ),
                ("reminder_time", models.TimeField(default=datetime.time(9, 0))),
                ("timezone", models.CharField(default="UTC", max_length=64)),
                ("language", models.CharField(default="en", max_length=8)),
                (
                    "parent",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notification_preferences",
                        to="parents.parent",
                    ),
                ),
            ],
            options={
                "db_table": "parents_notification_preference",
            },
        ),
    ]
