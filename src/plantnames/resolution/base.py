"""Abstract name source: the read-only remote boundary."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel, Field

from plantnames.core.models import CallResult


class SourceConfig(BaseModel):
    """Configuration for a name source."""

    rpc_urls: list[str] = Field(default_factory=list)
    contract_address: str = "0xeb4e16c804AE9275a655AbBc20cD0658A91F9235"
    multicall_address: str = "0xcA11bde05977b3631167028862bE2a173976CA11"
    timeout: float = 30.0


class AbstractNameSource(ABC):
    """
    Abstract base class for anything that can read plant names remotely.

    Implementations raise on transport failure and leave retrying to the
    caller. A name that is simply unset comes back as an empty string, not
    as an error.
    """

    SOURCE_NAME: ClassVar[str] = "unknown"

    @property
    def source_name(self) -> str:
        return self.SOURCE_NAME

    @abstractmethod
    async def fetch_name(self, entity_id: int, block_number: int) -> str:
        """
        Read the name of one plant at a block height.

        Args:
            entity_id: Plant NFT id
            block_number: Block height to evaluate the call at

        Returns:
            The raw name, possibly empty
        """
        ...

    @abstractmethod
    async def fetch_names(
        self,
        entity_ids: list[int],
        block_number: int,
    ) -> list[CallResult]:
        """
        Read several names in one round trip.

        Args:
            entity_ids: Plant NFT ids
            block_number: Block height shared by every sub-call

        Returns:
            One CallResult per id, in request order
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None

    async def __aenter__(self) -> AbstractNameSource:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
