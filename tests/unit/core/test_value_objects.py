"""
Unit tests for core value objects.
"""
import pytest

from core.domain.exceptions import InvalidInputError, InvalidTierError
from core.domain.value_objects import Email, Tier, ValidationReason


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(InvalidInputError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(InvalidInputError, match="Invalid email"):
            Email("")

    def test_email_too_long(self):
        with pytest.raises(InvalidInputError, match="too long"):
            Email("a" * 250 + "@x.io")

    def test_equality_by_value(self):
        assert Email("a@b.io") == Email("a@b.io")
        assert hash(Email("a@b.io")) == hash(Email("a@b.io"))


class TestTier:
    """Tests for Tier value object."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("S", Tier.SENTINEL),
            ("g", Tier.GUARDIAN),
            ("Aegis", Tier.AEGIS),
            (" sentinel ", Tier.SENTINEL),
            (Tier.GUARDIAN, Tier.GUARDIAN),
        ],
    )
    def test_parse(self, raw, expected):
        """Test parsing codes, names and Tier instances."""
        assert Tier.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["X", "", "Platinum", None, 3])
    def test_parse_invalid(self, raw):
        """Test invalid tiers raise InvalidTierError."""
        with pytest.raises(InvalidTierError) as exc_info:
            Tier.parse(raw)
        assert exc_info.value.code == "INVALID_TIER"

    def test_invalid_tier_is_invalid_input(self):
        assert issubclass(InvalidTierError, InvalidInputError)

    def test_code_and_display_name(self):
        assert Tier.AEGIS.code == "A"
        assert Tier.AEGIS.display_name == "Aegis"
        assert str(Tier.SENTINEL) == "S"


def test_validation_reason_values():
    assert [str(reason) for reason in ValidationReason] == [
        "not_found",
        "deactivated",
        "expired",
        "ip_mismatch",
    ]
