"""Event and record schemas for the name-annotated Pixotchi tables."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from plantnames.core.types import EventName


def to_camel_case(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


class EventSchema(BaseModel):
    """
    Base schema for event arguments and records.

    Configured with camelCase aliases so decoded log arguments and stored
    rows use the contract's field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        from_attributes=True,
    )


class ChainEvent(EventSchema):
    """A decoded contract event as delivered by the event pipeline."""

    name: EventName
    id: str = Field(..., description="Unique event id (tx hash + log index)")
    chain_id: int
    block_number: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)
    args: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Event arguments
# ============================================================================


class ItemConsumedArgs(EventSchema):
    nft_id: int
    giver: str
    item_id: int


class ShopItemPurchasedArgs(EventSchema):
    nft_id: int
    buyer: str
    item_id: int


class MintArgs(EventSchema):
    id: int


class PlayedArgs(EventSchema):
    id: int
    points: int
    time_extension: int
    game_name: str


class SpinGameV2PlayedArgs(EventSchema):
    nft_id: int
    player: str
    reward_index: int
    points_delta: int
    time_added: int
    leaf_amount: int


class AttackArgs(EventSchema):
    attacker: int
    winner: int
    loser: int
    scores_won: int


class KilledArgs(EventSchema):
    nft_id: int
    dead_id: int
    loser_name: str
    reward: int
    killer: str
    winner_name: str


# ============================================================================
# Records
# ============================================================================


class EventRecord(EventSchema):
    """Base for rows handed to the storage layer for upsert."""

    id: str
    timestamp: int


class ItemConsumedRecord(EventRecord):
    nft_id: int
    nft_name: str
    giver: str
    item_id: int


class ShopItemPurchasedRecord(EventRecord):
    nft_id: int
    nft_name: str
    giver: str
    item_id: int


class MintRecord(EventRecord):
    nft_id: int


class PlayedRecord(EventRecord):
    nft_id: int
    nft_name: str
    points: int
    time_extension: int
    game_name: str
    # SpinGameV2 only
    player: str | None = None
    reward_index: int | None = None
    time_added: int | None = None
    leaf_amount: int | None = None


class AttackRecord(EventRecord):
    attacker: int
    attacker_name: str
    winner: int
    winner_name: str
    loser: int
    loser_name: str
    scores_won: int


class KilledRecord(EventRecord):
    nft_id: int
    dead_id: int
    loser_name: str
    reward: int
    killer: str
    winner_name: str
