"""
Django admin configuration for licenses app.
"""
import json
import logging

from asgiref.sync import async_to_sync
from django.contrib import admin, messages
from django.utils.html import format_html

from core.infrastructure.events import event_bus
from licenses.domain.events import LicenseDeactivated, LicenseUnbound
from licenses.domain.services import LicenseLifecycleManager
from licenses.infrastructure.models import AuditLog, License
from licenses.infrastructure.repositories.django_license_store import DjangoLicenseStore

logger = logging.getLogger(__name__)


def clear_ip_binding(license_keys, store=None):
    """
    Clear the address binding of each license key.

    This is the only code path that unpins a bound license.

    Returns:
        Number of licenses that were bound and are now unbound
    """
    store = store or DjangoLicenseStore()
    cleared = 0
    for key in license_keys:
        license, previous_ip = async_to_sync(LicenseLifecycleManager.clear_binding)(key, store)
        if previous_ip:
            cleared += 1
            logger.info("Cleared IP binding of license %s...", key[:8])
            async_to_sync(event_bus.publish)(
                LicenseUnbound.new(license.key, previous_ip=previous_ip)
            )
    return cleared


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "tier",
        "owner_email",
        "status_display",
        "bound_ip",
        "expires_at",
        "last_validated",
        "created_at",
    ]
    list_filter = ["tier", "active", "expires_at", "created_at"]
    search_fields = ["key", "owner_email", "bound_ip", "last_seen_ip"]
    readonly_fields = [
        "id",
        "key",
        "bound_ip",
        "last_seen_ip",
        "last_validated",
        "created_at",
        "updated_at",
    ]
    actions = ["clear_binding_action", "deactivate_action"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "tier", "owner_email", "active"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Binding",
            {
                "fields": ("bound_ip", "last_seen_ip", "last_validated"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.display(description="Status")
    def status_display(self, obj):
        """Display status with color coding."""
        if obj.active:
            label, color = "ACTIVE", "green"
        else:
            label, color = "INACTIVE", "gray"
        return format_html('<span style="color: {}; font-weight: bold;">{}</span>', color, label)

    @admin.action(description="Clear IP binding")
    def clear_binding_action(self, request, queryset):
        """Unpin the selected licenses so the next validation binds again."""
        keys = list(queryset.values_list("key", flat=True))
        cleared = clear_ip_binding(keys)
        self.message_user(request, f"Cleared binding on {cleared} license(s).", messages.SUCCESS)

    @admin.action(description="Deactivate selected licenses")
    def deactivate_action(self, request, queryset):
        """Deactivate the selected licenses through the license store."""
        store = DjangoLicenseStore()
        count = 0
        for key in queryset.values_list("key", flat=True):
            license = async_to_sync(LicenseLifecycleManager.deactivate_license)(key, store)
            if license:
                count += 1
                async_to_sync(event_bus.publish)(LicenseDeactivated.new(license.key))
        self.message_user(request, f"Deactivated {count} license(s).", messages.SUCCESS)


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Admin interface for AuditLog model."""

    list_display = [
        "action",
        "entity_type",
        "entity_id",
        "actor",
        "created_at",
    ]
    list_filter = ["action", "entity_type", "created_at"]
    search_fields = ["actor", "entity_id"]
    readonly_fields = ["id", "event_id", "created_at", "changes_display"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "event_id", "entity_type", "entity_id", "action"),
            },
        ),
        (
            "Details",
            {
                "fields": ("actor", "changes_display", "created_at"),
            },
        ),
    )

    @admin.display(description="Changes")
    def changes_display(self, obj):
        """Display changes in a formatted way."""
        if obj.changes:
            return format_html(
                '<pre style="background: #f5f5f5; padding: 10px; '
                'border-radius: 4px; overflow-x: auto;">{}</pre>',
                json.dumps(obj.changes, indent=2),
            )
        return "-"

    def has_add_permission(self, request):
        """Audit logs are read-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Audit logs should not be deleted."""
        return False
