"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest

from plantnames.cache.client import NameCache
from plantnames.config import PlantNamesSettings
from plantnames.core.exceptions import RemoteCallError
from plantnames.core.models import CallResult
from plantnames.core.types import CallStatus, Network
from plantnames.resolution.base import AbstractNameSource
from plantnames.resolution.gate import CutoverGate
from plantnames.resolution.resolver import PlantNameResolver
from plantnames.resolution.retry import RetryPolicy

# ============================================================================
# Test Data Constants
# ============================================================================


BASE = int(Network.BASE)
TTL = 300.0


# ============================================================================
# Test Doubles
# ============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers every delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeNameSource(AbstractNameSource):
    """In-memory name source that records every remote call."""

    SOURCE_NAME = "fake"

    def __init__(
        self,
        names: dict[int, str] | None = None,
        *,
        failures: int = 0,
        always_fail: bool = False,
        batch_results: list[CallResult] | None = None,
    ) -> None:
        self.names = dict(names or {})
        self.failures = failures
        self.always_fail = always_fail
        self.batch_results = batch_results
        self.single_calls: list[tuple[int, int]] = []
        self.batch_calls: list[tuple[list[int], int]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.single_calls) + len(self.batch_calls)

    def _maybe_fail(self) -> None:
        if self.always_fail:
            raise RemoteCallError("node unavailable", source=self.SOURCE_NAME)
        if self.failures > 0:
            self.failures -= 1
            raise RemoteCallError("node unavailable", source=self.SOURCE_NAME)

    async def fetch_name(self, entity_id: int, block_number: int) -> str:
        self.single_calls.append((entity_id, block_number))
        self._maybe_fail()
        return self.names.get(entity_id, "")

    async def fetch_names(self, entity_ids: list[int], block_number: int) -> list[CallResult]:
        self.batch_calls.append((list(entity_ids), block_number))
        self._maybe_fail()
        if self.batch_results is not None:
            return list(self.batch_results)
        return [
            CallResult(status=CallStatus.SUCCESS, result=self.names[entity_id])
            if entity_id in self.names
            else CallResult(status=CallStatus.FAILURE, error="execution reverted")
            for entity_id in entity_ids
        ]

    async def close(self) -> None:
        self.closed = True


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def cache(clock: FakeClock) -> NameCache:
    """Isolated cache driven by the fake clock."""
    return NameCache(ttl=TTL, clock=clock)


@pytest.fixture
def retry_policy(sleep: RecordingSleep) -> RetryPolicy:
    """Default-shaped retry policy that never actually sleeps."""
    return RetryPolicy(max_retries=3, base_delay=1.0, jitter=1.0, sleep=sleep)


@pytest.fixture
def make_source():
    """Factory fixture for fake name sources with custom behavior."""
    return FakeNameSource


@pytest.fixture
def source() -> FakeNameSource:
    return FakeNameSource({42: "Sunflower", 7: "Cactus", 9: "Fern"})


@pytest.fixture
def resolver(
    source: FakeNameSource,
    cache: NameCache,
    retry_policy: RetryPolicy,
) -> PlantNameResolver:
    return PlantNameResolver(source, cache, gate=CutoverGate(), retry_policy=retry_policy)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings() -> PlantNamesSettings:
    """Create mock settings for testing."""
    return PlantNamesSettings(
        rpc_urls=["https://rpc-1.test/v1", "https://rpc-2.test/v1"],
        chain_id=BASE,
        cache_ttl=TTL,
        max_retries=2,
        retry_base_delay=0.0,
        retry_jitter=0.0,
        request_timeout=5.0,
        log_level="DEBUG",
    )
