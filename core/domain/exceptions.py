"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.

Negative validation outcomes (not found, deactivated, expired,
IP mismatch) are NOT exceptions; they are returned as decisions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidInputError(DomainException):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str = "Invalid input", code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


class InvalidTierError(InvalidInputError):
    """Raised when a tier is not one of Sentinel, Guardian or Aegis."""

    def __init__(self, message: str = "Invalid tier"):
        super().__init__(message, code="INVALID_TIER")


class UnauthorizedError(DomainException):
    """Raised when the admin secret is missing or does not match."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateLicenseKeyError(LicenseException):
    """Raised when a generated key collides with an existing one."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DUPLICATE_LICENSE_KEY")


class StoreUnavailableError(DomainException):
    """Raised when the license store cannot be reached or fails on I/O."""

    def __init__(self, message: str = "License store unavailable"):
        super().__init__(message, code="STORE_UNAVAILABLE")
