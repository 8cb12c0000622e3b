"""
Django management command to issue a license from the command line.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import IssueLicenseHandler
from licenses.infrastructure.repositories import get_license_store

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to issue a new license."""

    help = "Issue a new license key for a tier (S/G/A or Sentinel/Guardian/Aegis)"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("tier", type=str, help="Tier code or name")
        parser.add_argument(
            "--email",
            type=str,
            default=None,
            help="Owner email",
        )
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Validity in days (default: LICENSE_DEFAULT_DAYS)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        command = IssueLicenseCommand(
            tier=options["tier"],
            owner_email=options["email"],
            days=options["days"] or settings.LICENSE_DEFAULT_DAYS,
        )
        handler = IssueLicenseHandler(license_store=get_license_store())

        try:
            result = async_to_sync(handler.handle)(command)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}") from e

        self.stdout.write(self.style.SUCCESS(result.key))
        self.stdout.write(f"  tier:    {result.tier_name} ({result.tier})")
        self.stdout.write(f"  owner:   {result.owner_email or '-'}")
        self.stdout.write(f"  expires: {result.expires_at.isoformat()}")
