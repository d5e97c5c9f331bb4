"""Core domain types, models and exceptions."""

from plantnames.core.exceptions import (
    AbiDecodeError,
    EndpointsExhaustedError,
    PlantNamesError,
    RateLimitError,
    RemoteCallError,
    RetryExhaustedError,
)
from plantnames.core.models import (
    CallResult,
    ResolutionOutcome,
    ResolutionRequest,
    fallback_name,
    is_usable_name,
)
from plantnames.core.types import CallStatus, EventName, Network, OutcomeKind

__all__ = [
    # Types
    "CallStatus",
    "EventName",
    "Network",
    "OutcomeKind",
    # Models
    "CallResult",
    "ResolutionOutcome",
    "ResolutionRequest",
    "fallback_name",
    "is_usable_name",
    # Exceptions
    "AbiDecodeError",
    "EndpointsExhaustedError",
    "PlantNamesError",
    "RateLimitError",
    "RemoteCallError",
    "RetryExhaustedError",
]
