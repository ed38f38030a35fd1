"""Error hierarchy for srcreg.

Error layers:
- SrcRegError: Base class for all srcreg errors
- DomainError: Registry rule violations (unknown source, duplicate URL, wrong writer)
- InfrastructureError: System-level failures like storage or configuration issues

Every error is terminal for the call that raised it. The registry never retries.
"""


class SrcRegError(Exception):
    """Base class for all srcreg errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(SrcRegError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """No record stored under the requested id or URL."""


class ConflictError(DomainError):
    """Resource already exists."""


class DuplicateEntryError(ConflictError):
    """The URL fingerprint is already indexed."""

    def __init__(self, message: str, fingerprint: str | None = None) -> None:
        super().__init__(message, code="duplicate_entry")
        self.fingerprint = fingerprint


class AuthorizationError(DomainError):
    """Caller not authorized for this operation."""


class UnauthorizedError(AuthorizationError):
    """Caller is not the designated writer."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="unauthorized")


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(SrcRegError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
