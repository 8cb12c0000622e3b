"""
License and AuditLog models.
"""
import uuid

from django.db import models
from django.utils import timezone


class License(models.Model):
    """
    A license record issued to a bot owner.
    Keyed by its opaque license key.
    """

    TIER_CHOICES = [
        ("S", "Sentinel"),
        ("G", "Guardian"),
        ("A", "Aegis"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True, db_index=True)
    tier = models.CharField(max_length=1, choices=TIER_CHOICES, default="S")
    owner_email = models.EmailField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField()
    active = models.BooleanField(default=True, db_index=True)
    bound_ip = models.CharField(
        max_length=64, null=True, blank=True, help_text="Address the license is pinned to"
    )
    last_seen_ip = models.CharField(max_length=64, null=True, blank=True)
    last_validated = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["active", "expires_at"], name="licenses_active_expiry_idx"),
        ]

    def __str__(self):
        return f"{self.key} ({self.get_tier_display()})"


class AuditLog(models.Model):
    """
    Immutable audit trail of all license-related changes.
    """

    ACTION_CHOICES = [
        ("LicenseIssued", "License Issued"),
        ("LicenseActivated", "License Activated"),
        ("LicenseRenewed", "License Renewed"),
        ("LicenseDeactivated", "License Deactivated"),
        ("LicenseExpired", "License Expired"),
        ("LicenseBound", "License Bound"),
        ("LicenseUnbound", "License Unbound"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    entity_type = models.CharField(max_length=50, default="license")
    entity_id = models.CharField(max_length=100, db_index=True)
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    changes = models.JSONField(default=dict, help_text="Details of the change")
    actor = models.CharField(max_length=255, help_text="Who performed the action")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["entity_type", "entity_id"], name="audit_logs_entity_idx"),
            models.Index(fields=["created_at"], name="audit_logs_created_idx"),
            models.Index(fields=["action"], name="audit_logs_action_idx"),
        ]

    def __str__(self):
        return f"{self.action} - {self.entity_type} {self.entity_id}"
