"""Core enums and type definitions."""

from enum import IntEnum, StrEnum


class Network(IntEnum):
    """Chain ids the indexer runs against."""

    BASE = 8453
    BASE_SEPOLIA = 84532


class OutcomeKind(StrEnum):
    """How a name was obtained."""

    CACHE_HIT = "cache_hit"
    FALLBACK = "fallback"
    RESOLVED = "resolved"


class CallStatus(StrEnum):
    """Status of one sub-call inside a batched remote call."""

    SUCCESS = "success"
    FAILURE = "failure"


class EventName(StrEnum):
    """Contract events the annotator understands."""

    ITEM_CONSUMED = "ItemConsumed"
    SHOP_ITEM_PURCHASED = "ShopItemPurchased"
    MINT = "Mint"
    PLAYED = "Played"
    PLAYED_V2 = "PlayedV2"
    SPIN_GAME_V2_PLAYED = "SpinGameV2Played"
    ATTACK = "Attack"
    KILLED = "Killed"
