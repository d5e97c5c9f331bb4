"""Per-network cutover below which no name lookup is attempted."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from plantnames.core.types import Network

# getPlantName only exists on the contract after these upgrade blocks.
DEFAULT_CUTOVERS: Mapping[int, int] = MappingProxyType(
    {
        Network.BASE: 15_119_426,
        Network.BASE_SEPOLIA: 11_004_255,
    }
)

# Chains outside the table are treated like the testnet deployment.
DEFAULT_UNKNOWN_CUTOVER = DEFAULT_CUTOVERS[Network.BASE_SEPOLIA]


class CutoverGate:
    """
    Decides whether a block predates the name feature on a chain.

    The table is copied at construction and read-only afterwards.
    """

    def __init__(
        self,
        overrides: Mapping[int, int] | None = None,
        *,
        default: int = DEFAULT_UNKNOWN_CUTOVER,
    ) -> None:
        table = {int(k): v for k, v in DEFAULT_CUTOVERS.items()}
        if overrides:
            table.update({int(k): int(v) for k, v in overrides.items()})
        self._cutovers: Mapping[int, int] = MappingProxyType(table)
        self._default = default

    @property
    def cutovers(self) -> Mapping[int, int]:
        return self._cutovers

    def cutover(self, network: int) -> int:
        """Last block on ``network`` at which names are not yet readable."""
        return self._cutovers.get(int(network), self._default)

    def is_before_cutover(self, network: int, block_number: int) -> bool:
        return block_number <= self.cutover(network)
