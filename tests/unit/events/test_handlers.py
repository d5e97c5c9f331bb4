"""Tests for event annotation handlers."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from plantnames.core.types import EventName
from plantnames.events.handlers import EventAnnotator
from plantnames.events.models import (
    AttackRecord,
    ChainEvent,
    ItemConsumedRecord,
    KilledRecord,
    MintRecord,
    PlayedRecord,
    ShopItemPurchasedRecord,
)
from plantnames.resolution.resolver import PlantNameResolver

AFTER = 15_200_000
BEFORE = 15_119_400
PLAYER = "0x00000000000000000000000000000000000000a1"


def make_event(name: EventName, args: dict[str, Any], block_number: int = AFTER) -> ChainEvent:
    return ChainEvent.model_validate(
        {
            "name": name,
            "id": "0xabc-1",
            "chainId": 8453,
            "blockNumber": block_number,
            "timestamp": 1_700_000_000,
            "args": args,
        }
    )


@pytest.fixture
def annotator(resolver: PlantNameResolver) -> EventAnnotator:
    return EventAnnotator(resolver)


# ============================================================================
# Single-name Events
# ============================================================================


class TestSingleNameEvents:
    """Events that carry one plant id."""

    async def test_item_consumed(self, annotator: EventAnnotator):
        event = make_event(EventName.ITEM_CONSUMED, {"nftId": 42, "giver": PLAYER, "itemId": 3})

        record = await annotator.annotate(event)

        assert isinstance(record, ItemConsumedRecord)
        assert record.nft_name == "Sunflower"
        assert record.giver == PLAYER
        assert record.model_dump(by_alias=True)["nftName"] == "Sunflower"

    async def test_shop_item_purchased_maps_buyer(self, annotator: EventAnnotator):
        event = make_event(
            EventName.SHOP_ITEM_PURCHASED, {"nftId": 7, "buyer": PLAYER, "itemId": 1}
        )

        record = await annotator.annotate(event)

        assert isinstance(record, ShopItemPurchasedRecord)
        assert record.nft_name == "Cactus"
        assert record.giver == PLAYER

    @pytest.mark.parametrize("name", [EventName.PLAYED, EventName.PLAYED_V2])
    async def test_played(self, annotator: EventAnnotator, name: EventName):
        event = make_event(
            name,
            {"id": 9, "points": 100, "timeExtension": 3600, "gameName": "Box"},
        )

        record = await annotator.annotate(event)

        assert isinstance(record, PlayedRecord)
        assert record.nft_name == "Fern"
        assert record.game_name == "Box"
        assert record.player is None

    async def test_spin_game_v2(self, annotator: EventAnnotator):
        event = make_event(
            EventName.SPIN_GAME_V2_PLAYED,
            {
                "nftId": 42,
                "player": PLAYER,
                "rewardIndex": 2,
                "pointsDelta": 50,
                "timeAdded": 600,
                "leafAmount": 10,
            },
        )

        record = await annotator.annotate(event)

        assert isinstance(record, PlayedRecord)
        assert record.game_name == "SpinGameV2"
        assert record.points == 50
        assert record.time_extension == 600
        assert record.leaf_amount == 10

    async def test_pre_cutover_event_gets_fallback(self, annotator: EventAnnotator, source):
        event = make_event(
            EventName.ITEM_CONSUMED,
            {"nftId": 42, "giver": PLAYER, "itemId": 3},
            block_number=BEFORE,
        )

        record = await annotator.annotate(event)

        assert record.nft_name == "Plant #42"
        assert source.call_count == 0


# ============================================================================
# Multi-name and Name-free Events
# ============================================================================


class TestOtherEvents:
    """Attack (batched lookup) and events that need no lookup."""

    async def test_attack_batched(self, annotator: EventAnnotator, source):
        event = make_event(
            EventName.ATTACK,
            {"attacker": 42, "winner": 42, "loser": 5, "scoresWon": 12},
        )

        record = await annotator.annotate(event)

        assert isinstance(record, AttackRecord)
        assert record.attacker_name == "Sunflower"
        assert record.winner_name == "Sunflower"
        assert record.loser_name == "Plant #5"
        assert len(source.batch_calls) == 1
        assert source.single_calls == []

    async def test_mint_no_lookup(self, annotator: EventAnnotator, source):
        record = await annotator.annotate(make_event(EventName.MINT, {"id": 77}))

        assert isinstance(record, MintRecord)
        assert record.nft_id == 77
        assert source.call_count == 0

    async def test_killed_uses_event_names(self, annotator: EventAnnotator, source):
        event = make_event(
            EventName.KILLED,
            {
                "nftId": 1,
                "deadId": 2,
                "loserName": "Weed",
                "reward": 5,
                "killer": PLAYER,
                "winnerName": "Rose",
            },
        )

        record = await annotator.annotate(event)

        assert isinstance(record, KilledRecord)
        assert record.winner_name == "Rose"
        assert source.call_count == 0


# ============================================================================
# Dispatch Tests
# ============================================================================


class TestEventAnnotator:
    """Tests for handler dispatch."""

    def test_supports_all_events(self, annotator: EventAnnotator):
        assert all(annotator.supports(name) for name in EventName)

    async def test_unregistered_event(self, resolver: PlantNameResolver):
        annotator = EventAnnotator(resolver, handlers={})
        with pytest.raises(ValueError, match="Unsupported event"):
            await annotator.annotate(make_event(EventName.MINT, {"id": 1}))

    async def test_register_replaces_handler(self, annotator: EventAnnotator):
        async def custom(event, resolver):
            return MintRecord(id=event.id, timestamp=0, nft_id=0)

        annotator.register(EventName.MINT, custom)
        record = await annotator.annotate(make_event(EventName.MINT, {"id": 77}))
        assert record.nft_id == 0

    async def test_missing_args_rejected(self, annotator: EventAnnotator):
        with pytest.raises(ValidationError):
            await annotator.annotate(make_event(EventName.ATTACK, {"attacker": 1}))
