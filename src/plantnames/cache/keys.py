"""Cache keys for the plant name cache."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Identifies one cache slot: a plant id on a given chain."""

    network: int
    entity_id: int

    def __str__(self) -> str:
        return f"{self.network}:{self.entity_id}"


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    @classmethod
    def plant_name(cls, network: int, entity_id: int) -> CacheKey:
        """Key for the current name of a plant."""
        return CacheKey(int(network), int(entity_id))

    @classmethod
    def plant_names(cls, network: int, entity_ids: list[int]) -> list[CacheKey]:
        """Keys for several plants on the same chain, in input order."""
        return [cls.plant_name(network, entity_id) for entity_id in entity_ids]
