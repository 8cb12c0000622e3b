"""
Production settings for BotLicenseService.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

# Security settings
SECURE_SSL_REDIRECT = env_bool("SECURE_SSL_REDIRECT", True)  # noqa: F405
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

if not LICENSE_ADMIN_SECRET:  # noqa: F405
    import logging

    logging.getLogger(__name__).warning(
        "LICENSE_ADMIN_SECRET is empty; admin API will reject every request"
    )

# Logging in production
LOGGING = get_logging_config(  # noqa: F405
    "production", log_file=os.environ.get("LOG_FILE", "/var/log/bot-license-service/app.log")
)
