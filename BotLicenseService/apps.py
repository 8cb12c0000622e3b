"""
App configuration for Bot License Service.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that never serve requests.
SKIP_SETUP_COMMANDS = ("migrate", "makemigrations", "collectstatic", "check")


class BotLicenseServiceConfig(AppConfig):
    """App configuration for BotLicenseService."""

    name = "BotLicenseService"
    verbose_name = "Bot License Service"

    def ready(self):
        """Register event handlers and set up tracing once Django starts."""
        if len(sys.argv) > 1 and sys.argv[1] in SKIP_SETUP_COMMANDS:
            return

        # Django's autoreloader runs ready() in a watcher process as well.
        if os.environ.get("RUN_MAIN") == "false":
            return

        self.register_event_handlers()
        if getattr(settings, "OTEL_ENABLED", False):
            self.setup_observability()

    def setup_observability(self):
        """Setup OpenTelemetry tracing."""
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()

    def register_event_handlers(self):
        """Register audit and metrics handlers on the process event bus."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
