"""Exception types shared by the gateway, the provider clients and the store."""

from __future__ import annotations


class CineVaultError(Exception):
    """Base class for every error raised by this package."""


class ProviderError(CineVaultError):
    """A remote metadata provider could not answer.

    ``status_code`` is the HTTP status, or ``None`` for transport failures
    (DNS, timeout, refused connection) and undecodable bodies.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(ProviderError):
    """The provider answered, but has no record for the requested id."""


class GatewayFailure(CineVaultError):
    """A gateway operation failed; nothing was cached."""

    def __init__(self, operation: str, message: str | None = None):
        super().__init__(message or f"Failed to fetch {operation}")
        self.operation = operation


class PersistenceCorruption(CineVaultError):
    """Stored watchlist payload could not be decoded."""
