"""Custom exception hierarchy for plantnames."""

from typing import Any


class PlantNamesError(Exception):
    """Base exception for all plantnames errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RemoteCallError(PlantNamesError):
    """A read-only call against a node failed."""

    def __init__(
        self,
        message: str,
        source: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source
        self.status_code = status_code


class RateLimitError(RemoteCallError):
    """The node throttled the request."""

    def __init__(
        self,
        message: str,
        source: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, source, status_code=429, details=details)
        self.retry_after = retry_after


class EndpointsExhaustedError(RemoteCallError):
    """Every configured RPC endpoint failed for the same call."""

    pass


class AbiDecodeError(PlantNamesError):
    """Return data could not be decoded."""

    pass


class RetryExhaustedError(PlantNamesError):
    """An operation kept failing until the retry budget ran out."""

    def __init__(
        self,
        label: str,
        attempts: int,
        cause: BaseException,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"{label} failed after {attempts} attempts: {cause}",
            details,
        )
        self.label = label
        self.attempts = attempts
        self.cause = cause
