"""
Django management command to run the service on the configured PORT.
"""

import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to run the HTTP server."""

    help = "Apply migrations and serve the API on 0.0.0.0:PORT"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--port",
            type=int,
            default=None,
            help="Listening port (default: PORT setting)",
        )
        parser.add_argument(
            "--skip-migrate",
            action="store_true",
            help="Do not apply migrations before serving",
        )
        parser.add_argument(
            "--reload",
            action="store_true",
            help="Restart on code changes",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        port = options["port"] or settings.PORT

        if not options["skip_migrate"]:
            call_command("migrate", interactive=False, verbosity=0)

        if not settings.LICENSE_ADMIN_SECRET:
            logger.warning("LICENSE_ADMIN_SECRET is empty; admin API will reject every request")

        logger.info("Serving bot license service on port %s", port)
        call_command("runserver", f"0.0.0.0:{port}", use_reloader=options["reload"])
