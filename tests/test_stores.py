"""Tests for key-value store adapters."""

import asyncio
from dataclasses import dataclass, field

import pytest

from calorie_ledger.adapters.json_file_store import JsonFileStore
from calorie_ledger.adapters.supabase_store import SupabaseKeyValueStore


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    last_upsert: dict[str, object] | None = None
    last_on_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self._filters: list[tuple[str, object]] = []
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_upsert = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self._filters = []
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._action == "upsert":
            assert self.last_upsert is not None
            self.rows[str(self.last_upsert["key"])] = dict(self.last_upsert)
            return FakeResponse(data=[self.last_upsert])
        keys = [value for column, value in self._filters if column == "key"]
        if self._action == "delete":
            for key in keys:
                self.rows.pop(key, None)
            return FakeResponse(data=[])
        found = [self.rows[key] for key in keys if key in self.rows]
        return FakeResponse(data=[{"value": row["value"]} for row in found])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_json_file_store_roundtrip(tmp_path) -> None:
    store = JsonFileStore.create(tmp_path / "nested")

    async def scenario():
        missing = await store.get("ledger")
        await store.set("ledger", '{"days": {}}')
        stored = await store.get("ledger")
        await store.remove("ledger")
        await store.remove("ledger")
        return missing, stored, await store.get("ledger")

    missing, stored, removed = asyncio.run(scenario())

    assert missing is None
    assert stored == '{"days": {}}'
    assert removed is None
    assert list((tmp_path / "nested").iterdir()) == []


def test_json_file_store_rejects_path_keys(tmp_path) -> None:
    store = JsonFileStore.create(tmp_path)

    with pytest.raises(ValueError, match="Invalid storage key"):
        asyncio.run(store.set("../escape", "{}"))


def test_supabase_store_upserts_and_reads() -> None:
    client = FakeSupabaseClient()
    store = SupabaseKeyValueStore(client=client, table="kv_store")

    async def scenario():
        await store.set("profile", '{"schema_version": 2}')
        value = await store.get("profile")
        await store.remove("profile")
        return value, await store.get("profile")

    value, removed = asyncio.run(scenario())
    table = client.tables["kv_store"]

    assert value == '{"schema_version": 2}'
    assert removed is None
    assert table.last_on_conflict == "key"
    assert table.last_upsert is not None
    assert "updated_at" in table.last_upsert
