"""
License key generation.

Keys are opaque random tokens tagged with the tier code,
in the form ``{tier}-{24 upper-case hex characters}``.
"""

import re
import secrets
from typing import Union

from core.domain.value_objects import Tier

KEY_RANDOM_BYTES = 12
LICENSE_KEY_PATTERN = re.compile(r"^[SGA]-[0-9A-F]{24}$")


def generate_license_key(tier: Union[Tier, str]) -> str:
    """
    Generate a license key in format: T-XXXXXXXXXXXXXXXXXXXXXXXX.

    Args:
        tier: Tier, tier code or tier name

    Returns:
        Generated license key string

    Raises:
        InvalidTierError: If tier is not S, G or A
    """
    tier = Tier.parse(tier)
    return f"{tier.code}-{secrets.token_hex(KEY_RANDOM_BYTES).upper()}"


def looks_like_generated_key(key: str) -> bool:
    """
    Check whether a key has the shape of a generated key.

    Keys created through activate-on-unknown-key may have any shape,
    so this is informational only.
    """
    return bool(LICENSE_KEY_PATTERN.match(key or ""))
