"""Main library client for standalone usage."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from plantnames.cache.client import NameCache
from plantnames.config import PlantNamesSettings
from plantnames.events.handlers import EventAnnotator
from plantnames.events.models import ChainEvent, EventRecord
from plantnames.resolution.base import AbstractNameSource, SourceConfig
from plantnames.resolution.gate import CutoverGate
from plantnames.resolution.resolver import PlantNameResolver
from plantnames.resolution.retry import RetryPolicy
from plantnames.resolution.rpc import JsonRpcNameSource

logger = logging.getLogger(__name__)


class PlantNamesClient:
    """
    Main client for the plantnames library.

    Owns the name cache (and its sweep), the RPC source and the resolver for
    one process.

    Usage:
        async with PlantNamesClient() as client:
            name = await client.resolve_one(42, 15_200_000)
            names = await client.resolve_many([1, 2, 3], 15_200_000)
            record = await client.annotate(event)

    Settings are loaded from environment variables or can be passed explicitly.
    """

    def __init__(
        self,
        settings: PlantNamesSettings | None = None,
        *,
        source: AbstractNameSource | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Application settings. If not provided, loaded from environment.
            source: Name source to use instead of the JSON-RPC one built from settings.
        """
        self._settings = settings or PlantNamesSettings()
        self._source_override = source
        self._source: AbstractNameSource | None = None
        self._cache: NameCache | None = None
        self._resolver: PlantNameResolver | None = None
        self._annotator: EventAnnotator | None = None

    @property
    def settings(self) -> PlantNamesSettings:
        return self._settings

    @property
    def resolver(self) -> PlantNameResolver:
        self._ensure_initialized()
        return self._resolver

    async def __aenter__(self) -> PlantNamesClient:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize client resources."""
        logging.getLogger("plantnames").setLevel(self._settings.log_level.upper())

        self._source = self._source_override or JsonRpcNameSource(
            SourceConfig(
                rpc_urls=self._settings.rpc_urls,
                contract_address=self._settings.plant_contract_address,
                multicall_address=self._settings.multicall_address,
                timeout=self._settings.request_timeout,
            )
        )

        self._cache = NameCache(ttl=self._settings.cache_ttl)
        self._cache.start()

        self._resolver = PlantNameResolver(
            self._source,
            self._cache,
            gate=CutoverGate(self._settings.cutover_blocks),
            retry_policy=RetryPolicy(
                max_retries=self._settings.max_retries,
                base_delay=self._settings.retry_base_delay,
                jitter=self._settings.retry_jitter,
            ),
        )
        self._annotator = EventAnnotator(self._resolver)
        logger.info(
            f"Plant name resolver ready for chain {self._settings.chain_id} "
            f"({len(self._settings.rpc_urls)} RPC endpoints, ttl {self._settings.cache_ttl}s)"
        )

    async def close(self) -> None:
        """Close all resources."""
        if self._cache:
            await self._cache.close()
            self._cache = None

        if self._source:
            await self._source.close()
            self._source = None

        self._resolver = None
        self._annotator = None

    def _ensure_initialized(self) -> None:
        """Ensure client is initialized."""
        if self._resolver is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with PlantNamesClient() as client:'"
            )

    async def resolve_one(
        self,
        entity_id: int,
        block_number: int,
        *,
        network: int | None = None,
    ) -> str:
        """
        Resolve one plant name.

        Args:
            entity_id: Plant NFT id
            block_number: Block height of the triggering event
            network: Chain id (defaults to the configured chain)

        Returns:
            The plant name, or its ``Plant #<id>`` fallback
        """
        self._ensure_initialized()
        chain_id = self._settings.chain_id if network is None else network
        return await self._resolver.resolve_one(chain_id, entity_id, block_number)

    async def resolve_many(
        self,
        entity_ids: Sequence[int],
        block_number: int,
        *,
        network: int | None = None,
    ) -> list[str]:
        """Resolve several plant names in input order."""
        self._ensure_initialized()
        chain_id = self._settings.chain_id if network is None else network
        return await self._resolver.resolve_many(chain_id, entity_ids, block_number)

    async def annotate(self, event: ChainEvent) -> EventRecord:
        """Build the name-annotated record for a contract event."""
        self._ensure_initialized()
        return await self._annotator.annotate(event)
