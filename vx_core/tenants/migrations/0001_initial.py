import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("subdomain", models.SlugField(max_length=63, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("suspended", "Suspended"), ("cancelled", "Cancelled")],
                        db_index=True,
                        default="active",
                        max_length=16,
                    ),
                ),
                ("business_name", models.CharField(blank=True, max_length=255)),
                ("business_email", models.EmailField(blank=True, max_length=254)),
                ("business_phone", models.CharField(blank=True, max_length=32)),
                ("business_address", models.TextField(blank=True)),
                ("timezone", models.CharField(default="UTC", max_length=64)),
                ("locale", models.CharField(default="en", max_length=16)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "tenants_tenant",
                "indexes": [
                    models.Index(fields=["status"], name="tenants_status_idx"),
                    models.Index(fields=["created_at"], name="tenants_created_at_idx"),
                ],
            },
        ),
    ]
