"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from calorie_ledger.config import Settings
from calorie_ledger.containers import AppContainer, build_container
from calorie_ledger.services.ledger import LedgerService
from calorie_ledger.services.profile import ProfileService
from calorie_ledger.services.storage import KeyValueStore, StorageGateway


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.values[key] = value

    async def remove(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FailingKeyValueStore(InMemoryKeyValueStore):
    """Store whose writes or reads can be switched to fail."""

    fail_writes: bool = False
    fail_reads: bool = False

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("store unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("store unavailable")
        await super().set(key, value)


@dataclass
class SlowKeyValueStore(InMemoryKeyValueStore):
    """Store whose writes never finish within a test timeout."""

    delay_seconds: float = 1.0

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(self.delay_seconds)
        await super().set(key, value)


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, 8, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def make_ledger(
    store: KeyValueStore | None = None,
    clock: Callable[[], datetime] | None = None,
    timezone_name: str = "UTC",
    timeout_seconds: float = 5.0,
) -> LedgerService:
    gateway = StorageGateway(
        store=store or InMemoryKeyValueStore(), timeout_seconds=timeout_seconds
    )
    return LedgerService(
        storage=gateway,
        timezone_name=timezone_name,
        clock=clock or FakeClock(),
    )


def make_profile_service(store: KeyValueStore | None = None) -> ProfileService:
    return ProfileService(StorageGateway(store=store or InMemoryKeyValueStore()))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=str(tmp_path / "data"), timezone="UTC")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(
    settings: Settings, store: InMemoryKeyValueStore, clock: FakeClock
) -> AppContainer:
    built = build_container(settings, store=store)
    built.ledger_service.clock = clock
    built.rollover_scheduler.clock = clock
    return built
