"""Domain models for name resolution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import CallStatus, OutcomeKind

FALLBACK_PREFIX = "Plant #"

# Values a node hands back for a plant that was never named.
EMPTY_SENTINELS = frozenset({"", "0x"})


def fallback_name(entity_id: int) -> str:
    """Placeholder name derived from the id alone."""
    return f"{FALLBACK_PREFIX}{entity_id}"


def is_usable_name(value: str | None) -> bool:
    """Whether a payload returned by the node can be used as a name."""
    return bool(value) and value not in EMPTY_SENTINELS


class ResolutionRequest(BaseModel):
    """A single lookup of an id at a block height."""

    model_config = ConfigDict(frozen=True)

    entity_id: int = Field(..., ge=0, description="Plant NFT id")
    block_number: int = Field(..., ge=0, description="Block height to read at")


class ResolutionOutcome(BaseModel):
    """Result of resolving one id, tagged with how the name was obtained."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    entity_id: int = Field(..., ge=0)
    name: str

    @property
    def is_fallback(self) -> bool:
        return self.kind == OutcomeKind.FALLBACK

    @classmethod
    def fallback(cls, entity_id: int) -> ResolutionOutcome:
        return cls(kind=OutcomeKind.FALLBACK, entity_id=entity_id, name=fallback_name(entity_id))


class CallResult(BaseModel):
    """Outcome of one sub-call inside a batched remote call."""

    model_config = ConfigDict(frozen=True)

    status: CallStatus
    result: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status == CallStatus.SUCCESS

    @property
    def usable(self) -> bool:
        """Succeeded and carries a non-empty name."""
        return self.success and is_usable_name(self.result)
