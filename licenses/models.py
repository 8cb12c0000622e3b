"""
Model registration for the licenses app.

Models live in the infrastructure layer; Django discovers them here.
"""
from licenses.infrastructure.models import AuditLog, License  # noqa: F401
