"""
Test settings for BotLicenseService.
"""

import os
import tempfile
import urllib.parse

from .base import *  # noqa: F403, F401
from .base import sqlite_database

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use PostgreSQL in CI (from DATABASE_URL), a throwaway SQLite file for local tests.
# A file (not shared-cache memory) lets concurrent writers wait on BEGIN IMMEDIATE.
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path.lstrip("/")
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {"NAME": db_name + "_test"},
        }
    }
else:
    DATABASES = {
        "default": {
            **sqlite_database(":memory:"),
            "TEST": {
                "NAME": os.path.join(
                    tempfile.gettempdir(), f"bot_license_test_{os.getpid()}.sqlite3"
                ),
            },
        }
    }

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LICENSE_ADMIN_SECRET = "test-admin-secret"
LICENSE_BIND_IP = True
LICENSE_DEFAULT_DAYS = 30
LICENSE_STORE_BACKEND = "django"

RATE_LIMIT_ENABLED = False
OTEL_ENABLED = False

# Disable logging during tests
LOGGING_CONFIG = None
