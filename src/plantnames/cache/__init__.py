"""Time-expiring plant name cache."""

from .client import CacheEntry, NameCache
from .keys import CacheKey, CacheKeys

__all__ = [
    "CacheEntry",
    "CacheKey",
    "CacheKeys",
    "NameCache",
]
