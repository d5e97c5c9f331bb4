"""Plant name resolution facade: cache, cutover gate, retry and remote source."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from plantnames.cache.client import NameCache
from plantnames.cache.keys import CacheKeys
from plantnames.core.exceptions import PlantNamesError
from plantnames.core.models import ResolutionOutcome, ResolutionRequest, is_usable_name
from plantnames.core.types import OutcomeKind
from plantnames.resolution.base import AbstractNameSource
from plantnames.resolution.gate import CutoverGate
from plantnames.resolution.retry import RetryPolicy

logger = logging.getLogger(__name__)


class PlantNameResolver:
    """
    Single entry point for turning plant ids into names.

    Every method is total: remote failures, empty payloads and batch
    misalignment all degrade to ``"Plant #<id>"`` and are logged. Fallbacks
    are cached like real names, so a name that failed to resolve is not
    retried until its entry expires.

    Usage:
        resolver = PlantNameResolver(source, cache)
        name = await resolver.resolve_one(8453, 42, 15_200_000)
        names = await resolver.resolve_many(8453, [1, 2, 3], 15_200_000)
    """

    def __init__(
        self,
        source: AbstractNameSource,
        cache: NameCache,
        *,
        gate: CutoverGate | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._source = source
        self._cache = cache
        self._gate = gate or CutoverGate()
        self._retry = retry_policy or RetryPolicy()

    @property
    def cache(self) -> NameCache:
        return self._cache

    @property
    def gate(self) -> CutoverGate:
        return self._gate

    def _remember_fallback(self, network: int, entity_id: int) -> ResolutionOutcome:
        outcome = ResolutionOutcome.fallback(entity_id)
        self._cache.put(CacheKeys.plant_name(network, entity_id), outcome.name)
        return outcome

    async def resolve_one_outcome(
        self,
        network: int,
        entity_id: int,
        block_number: int,
    ) -> ResolutionOutcome:
        """
        Resolve one plant name, reporting how it was obtained.

        A fresh cache entry wins over the cutover check, so a name resolved
        by a later event is reused for older blocks too.
        """
        request = ResolutionRequest(entity_id=entity_id, block_number=block_number)
        key = CacheKeys.plant_name(network, request.entity_id)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for plant name {key}")
            return ResolutionOutcome(kind=OutcomeKind.CACHE_HIT, entity_id=entity_id, name=cached)

        if self._gate.is_before_cutover(network, request.block_number):
            return self._remember_fallback(network, entity_id)

        try:
            raw = await self._retry.run(
                lambda: self._source.fetch_name(request.entity_id, request.block_number),
                label=f"getPlantName for NFT {entity_id}",
            )
        except PlantNamesError as e:
            logger.warning(
                f"Failed to get plant name for NFT {entity_id} after retries, using fallback: {e}"
            )
            return self._remember_fallback(network, entity_id)

        if not is_usable_name(raw):
            return self._remember_fallback(network, entity_id)

        self._cache.put(key, raw)
        return ResolutionOutcome(kind=OutcomeKind.RESOLVED, entity_id=entity_id, name=raw)

    async def resolve_one(self, network: int, entity_id: int, block_number: int) -> str:
        """Resolve one plant name. Never raises for remote failures."""
        outcome = await self.resolve_one_outcome(network, entity_id, block_number)
        return outcome.name

    async def resolve_many_outcomes(
        self,
        network: int,
        entity_ids: Sequence[int],
        block_number: int,
    ) -> list[ResolutionOutcome]:
        """
        Resolve several plant names with at most one batched remote call.

        The result has the same length and order as ``entity_ids``.
        """
        for entity_id in entity_ids:
            ResolutionRequest(entity_id=entity_id, block_number=block_number)

        if self._gate.is_before_cutover(network, block_number):
            return [self._remember_fallback(network, entity_id) for entity_id in entity_ids]

        outcomes: list[ResolutionOutcome] = []
        pending: list[tuple[int, int]] = []  # (output index, entity id)

        for index, entity_id in enumerate(entity_ids):
            cached = self._cache.get(CacheKeys.plant_name(network, entity_id))
            if cached is not None:
                outcomes.append(
                    ResolutionOutcome(kind=OutcomeKind.CACHE_HIT, entity_id=entity_id, name=cached)
                )
            else:
                outcomes.append(ResolutionOutcome.fallback(entity_id))
                pending.append((index, entity_id))

        if not pending:
            return outcomes

        pending_ids = [entity_id for _, entity_id in pending]
        try:
            results = await self._retry.run(
                lambda: self._source.fetch_names(pending_ids, block_number),
                label=f"multicall for {len(pending_ids)} plant names",
            )
        except PlantNamesError as e:
            logger.warning(f"Failed to batch fetch plant names after retries, using fallbacks: {e}")
            for _, entity_id in pending:
                self._remember_fallback(network, entity_id)
            return outcomes

        if len(results) < len(pending):
            logger.warning(
                f"Multicall returned {len(results)} results for {len(pending)} plant names; "
                f"keeping fallbacks for the remainder"
            )

        # Slots past the end of a short response keep their uncached fallback.
        for (index, entity_id), result in zip(pending, results):
            if result.usable:
                outcomes[index] = ResolutionOutcome(
                    kind=OutcomeKind.RESOLVED,
                    entity_id=entity_id,
                    name=result.result,
                )
                self._cache.put(CacheKeys.plant_name(network, entity_id), result.result)
            else:
                if not result.success:
                    logger.warning(f"getPlantName for NFT {entity_id} failed in batch: {result.error}")
                outcomes[index] = self._remember_fallback(network, entity_id)

        return outcomes

    async def resolve_many(
        self,
        network: int,
        entity_ids: Sequence[int],
        block_number: int,
    ) -> list[str]:
        """Resolve several plant names in input order. Never raises for remote failures."""
        outcomes = await self.resolve_many_outcomes(network, entity_ids, block_number)
        return [outcome.name for outcome in outcomes]
