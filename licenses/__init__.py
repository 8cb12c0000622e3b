"""
Licenses module - license records for bot clients.

This module handles:
- License entity, key generation and domain logic
- License lifecycle (issue, activate, renew, deactivate)
- License validation and IP binding
- License store adapters (Django ORM, in-memory)
"""
