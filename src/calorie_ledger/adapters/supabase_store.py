"""Supabase-backed key-value store."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_ledger.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores values as rows ``{key, value, updated_at}`` in one table."""

    client: Client
    table: str = "kv_store"

    async def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str) -> None:
        """Insert or replace the value for a key."""
        await asyncio.to_thread(self._set, key, value)

    async def remove(self, key: str) -> None:
        """Delete the row for a key."""
        await asyncio.to_thread(self._remove, key)

    def _get(self, key: str) -> str | None:
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def _set(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

    def _remove(self, key: str) -> None:
        self.client.table(self.table).delete().eq("key", key).execute()
