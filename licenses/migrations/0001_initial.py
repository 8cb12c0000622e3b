import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(db_index=True, max_length=100, unique=True)),
                (
                    "tier",
                    models.CharField(
                        choices=[("S", "Sentinel"), ("G", "Guardian"), ("A", "Aegis")],
                        default="S",
                        max_length=1,
                    ),
                ),
                (
                    "owner_email",
                    models.EmailField(blank=True, db_index=True, max_length=254, null=True),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField()),
                ("active", models.BooleanField(db_index=True, default=True)),
                (
                    "bound_ip",
                    models.CharField(
                        blank=True,
                        help_text="Address the license is pinned to",
                        max_length=64,
                        null=True,
                    ),
                ),
                ("last_seen_ip", models.CharField(blank=True, max_length=64, null=True)),
                ("last_validated", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["active", "expires_at"], name="licenses_active_expiry_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("event_id", models.UUIDField(unique=True)),
                ("entity_type", models.CharField(default="license", max_length=50)),
                ("entity_id", models.CharField(db_index=True, max_length=100)),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("LicenseIssued", "License Issued"),
                            ("LicenseActivated", "License Activated"),
                            ("LicenseRenewed", "License Renewed"),
                            ("LicenseDeactivated", "License Deactivated"),
                            ("LicenseExpired", "License Expired"),
                            ("LicenseBound", "License Bound"),
                            ("LicenseUnbound", "License Unbound"),
                        ],
                        max_length=50,
                    ),
                ),
                ("changes", models.JSONField(default=dict, help_text="Details of the change")),
                ("actor", models.CharField(help_text="Who performed the action", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "audit_logs",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["entity_type", "entity_id"], name="audit_logs_entity_idx"
                    ),
                    models.Index(fields=["created_at"], name="audit_logs_created_idx"),
                    models.Index(fields=["action"], name="audit_logs_action_idx"),
                ],
            },
        ),
    ]
