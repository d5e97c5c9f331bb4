"""Plantnames - cached, retrying plant name resolution for Pixotchi events."""

from plantnames.cache import CacheKey, CacheKeys, NameCache
from plantnames.client import PlantNamesClient
from plantnames.config import PlantNamesSettings, get_settings
from plantnames.core.models import ResolutionOutcome, ResolutionRequest, fallback_name
from plantnames.core.types import Network, OutcomeKind
from plantnames.resolution import (
    AbstractNameSource,
    CutoverGate,
    JsonRpcNameSource,
    PlantNameResolver,
    RetryPolicy,
)

__version__ = "0.1.0"
__all__ = [
    # Client
    "PlantNamesClient",
    # Config
    "PlantNamesSettings",
    "get_settings",
    # Cache
    "CacheKey",
    "CacheKeys",
    "NameCache",
    # Resolution
    "AbstractNameSource",
    "CutoverGate",
    "JsonRpcNameSource",
    "PlantNameResolver",
    "RetryPolicy",
    # Models
    "Network",
    "OutcomeKind",
    "ResolutionOutcome",
    "ResolutionRequest",
    "fallback_name",
    # Version
    "__version__",
]
