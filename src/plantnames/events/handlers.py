"""Event handlers that attach plant names to contract events."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from plantnames.core.types import EventName
from plantnames.events.models import (
    AttackArgs,
    AttackRecord,
    ChainEvent,
    EventRecord,
    ItemConsumedArgs,
    ItemConsumedRecord,
    KilledArgs,
    KilledRecord,
    MintArgs,
    MintRecord,
    PlayedArgs,
    PlayedRecord,
    ShopItemPurchasedArgs,
    ShopItemPurchasedRecord,
    SpinGameV2PlayedArgs,
)
from plantnames.resolution.resolver import PlantNameResolver

logger = logging.getLogger(__name__)

Handler = Callable[[ChainEvent, PlantNameResolver], Awaitable[EventRecord]]

SPIN_GAME_V2_NAME = "SpinGameV2"


async def handle_item_consumed(
    event: ChainEvent,
    resolver: PlantNameResolver,
) -> ItemConsumedRecord:
    args = ItemConsumedArgs.model_validate(event.args)
    name = await resolver.resolve_one(event.chain_id, args.nft_id, event.block_number)
    return ItemConsumedRecord(
        id=event.id,
        timestamp=event.timestamp,
        nft_id=args.nft_id,
        nft_name=name,
        giver=args.giver,
        item_id=args.item_id,
    )


async def handle_shop_item_purchased(
    event: ChainEvent,
    resolver: PlantNameResolver,
) -> ShopItemPurchasedRecord:
    args = ShopItemPurchasedArgs.model_validate(event.args)
    name = await resolver.resolve_one(event.chain_id, args.nft_id, event.block_number)
    return ShopItemPurchasedRecord(
        id=event.id,
        timestamp=event.timestamp,
        nft_id=args.nft_id,
        nft_name=name,
        giver=args.buyer,
        item_id=args.item_id,
    )


async def handle_mint(event: ChainEvent, resolver: PlantNameResolver) -> MintRecord:
    args = MintArgs.model_validate(event.args)
    return MintRecord(id=event.id, timestamp=event.timestamp, nft_id=args.id)


async def handle_played(event: ChainEvent, resolver: PlantNameResolver) -> PlayedRecord:
    """Handles both Played and PlayedV2, which share one argument layout."""
    args = PlayedArgs.model_validate(event.args)
    name = await resolver.resolve_one(event.chain_id, args.id, event.block_number)
    return PlayedRecord(
        id=event.id,
        timestamp=event.timestamp,
        nft_id=args.id,
        nft_name=name,
        points=args.points,
        time_extension=args.time_extension,
        game_name=args.game_name,
    )


async def handle_spin_game_v2_played(
    event: ChainEvent,
    resolver: PlantNameResolver,
) -> PlayedRecord:
    args = SpinGameV2PlayedArgs.model_validate(event.args)
    name = await resolver.resolve_one(event.chain_id, args.nft_id, event.block_number)
    return PlayedRecord(
        id=event.id,
        timestamp=event.timestamp,
        nft_id=args.nft_id,
        nft_name=name,
        points=args.points_delta,
        time_extension=args.time_added,
        game_name=SPIN_GAME_V2_NAME,
        player=args.player,
        reward_index=args.reward_index,
        time_added=args.time_added,
        leaf_amount=args.leaf_amount,
    )


async def handle_attack(event: ChainEvent, resolver: PlantNameResolver) -> AttackRecord:
    """Resolves attacker, winner and loser in one batched lookup."""
    args = AttackArgs.model_validate(event.args)
    attacker_name, winner_name, loser_name = await resolver.resolve_many(
        event.chain_id,
        [args.attacker, args.winner, args.loser],
        event.block_number,
    )
    return AttackRecord(
        id=event.id,
        timestamp=event.timestamp,
        attacker=args.attacker,
        attacker_name=attacker_name,
        winner=args.winner,
        winner_name=winner_name,
        loser=args.loser,
        loser_name=loser_name,
        scores_won=args.scores_won,
    )


async def handle_killed(event: ChainEvent, resolver: PlantNameResolver) -> KilledRecord:
    # Names arrive in the event itself.
    args = KilledArgs.model_validate(event.args)
    return KilledRecord(
        id=event.id,
        timestamp=event.timestamp,
        nft_id=args.nft_id,
        dead_id=args.dead_id,
        loser_name=args.loser_name,
        reward=args.reward,
        killer=args.killer,
        winner_name=args.winner_name,
    )


DEFAULT_HANDLERS: dict[EventName, Handler] = {
    EventName.ITEM_CONSUMED: handle_item_consumed,
    EventName.SHOP_ITEM_PURCHASED: handle_shop_item_purchased,
    EventName.MINT: handle_mint,
    EventName.PLAYED: handle_played,
    EventName.PLAYED_V2: handle_played,
    EventName.SPIN_GAME_V2_PLAYED: handle_spin_game_v2_played,
    EventName.ATTACK: handle_attack,
    EventName.KILLED: handle_killed,
}


class EventAnnotator:
    """
    Dispatches contract events to their handler and returns the record to store.

    Usage:
        annotator = EventAnnotator(resolver)
        record = await annotator.annotate(event)
    """

    def __init__(
        self,
        resolver: PlantNameResolver,
        handlers: dict[EventName, Handler] | None = None,
    ) -> None:
        self._resolver = resolver
        self._handlers = dict(handlers or DEFAULT_HANDLERS)

    def register(self, name: EventName, handler: Handler) -> None:
        """Register or replace the handler for an event."""
        self._handlers[name] = handler

    def supports(self, name: EventName) -> bool:
        return name in self._handlers

    async def annotate(self, event: ChainEvent) -> EventRecord:
        handler = self._handlers.get(event.name)
        if handler is None:
            raise ValueError(f"Unsupported event: {event.name}")
        record = await handler(event, self._resolver)
        logger.debug(f"Annotated {event.name} {event.id} at block {event.block_number}")
        return record
