"""
Integration tests for management commands.
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from licenses.infrastructure.models import License as LicenseModel


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseCommand:
    """Tests for the issue_license command."""

    def test_issue(self):
        out = StringIO()

        call_command("issue_license", "Aegis", "--email", "ops@example.com", "--days", "3", stdout=out)

        key = out.getvalue().splitlines()[0].strip()
        row = LicenseModel.objects.get(key=key)
        assert row.tier == "A"
        assert row.owner_email == "ops@example.com"
        assert "Aegis (A)" in out.getvalue()

    def test_invalid_tier(self):
        with pytest.raises(CommandError, match="INVALID_TIER"):
            call_command("issue_license", "Platinum", stdout=StringIO())

        assert LicenseModel.objects.count() == 0
