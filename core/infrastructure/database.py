"""
Database utilities and error translation.
"""

import contextlib
import logging
from typing import Iterator

from django.db import DatabaseError

from core.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_database_errors(operation: str) -> Iterator[None]:
    """
    Translate low-level database failures into StoreUnavailableError.

    Integrity errors must be handled inside the block; anything that
    still escapes as a DatabaseError is logged with its traceback.

    Usage:
        with translate_database_errors("get"), transaction.atomic():
            # Database operations
            pass
    """
    try:
        yield
    except DatabaseError as exc:
        logger.error("License store %s failed: %s", operation, exc, exc_info=True)
        raise StoreUnavailableError(f"License store unavailable during {operation}") from exc
