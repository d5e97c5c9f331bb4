"""Resolution layer for reading plant names from the chain."""

from plantnames.resolution.base import AbstractNameSource, SourceConfig
from plantnames.resolution.gate import CutoverGate
from plantnames.resolution.resolver import PlantNameResolver
from plantnames.resolution.retry import RetryPolicy, with_retry
from plantnames.resolution.rpc import JsonRpcNameSource

__all__ = [
    # Base
    "AbstractNameSource",
    "SourceConfig",
    # Policies
    "CutoverGate",
    "RetryPolicy",
    "with_retry",
    # Sources
    "JsonRpcNameSource",
    # Facade
    "PlantNameResolver",
]
