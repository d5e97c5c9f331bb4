"""Name annotation for Pixotchi contract events."""

from plantnames.events.handlers import DEFAULT_HANDLERS, EventAnnotator
from plantnames.events.models import (
    AttackRecord,
    ChainEvent,
    EventRecord,
    ItemConsumedRecord,
    KilledRecord,
    MintRecord,
    PlayedRecord,
    ShopItemPurchasedRecord,
)

__all__ = [
    "DEFAULT_HANDLERS",
    "EventAnnotator",
    "AttackRecord",
    "ChainEvent",
    "EventRecord",
    "ItemConsumedRecord",
    "KilledRecord",
    "MintRecord",
    "PlayedRecord",
    "ShopItemPurchasedRecord",
]
