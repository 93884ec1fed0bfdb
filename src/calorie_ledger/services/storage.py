"""Key-value storage interface and timeout-guarded access."""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from calorie_ledger.domain.errors import StorageError

PROFILE_KEY = "profile"
LEDGER_KEY = "ledger"

T = TypeVar("T")

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Asynchronous string key-value store."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    async def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    async def remove(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class StorageGateway:
    """Wraps a store so that failures and timeouts surface as StorageError."""

    store: KeyValueStore
    timeout_seconds: float = 5.0

    async def get(self, key: str) -> str | None:
        """Read a key."""
        return await self._call("get", key, self.store.get(key))

    async def set(self, key: str, value: str) -> None:
        """Write a key."""
        await self._call("set", key, self.store.set(key, value))

    async def remove(self, key: str) -> None:
        """Delete a key."""
        await self._call("remove", key, self.store.remove(key))

    async def _call(self, action: str, key: str, operation: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            logger.warning("Storage %s timed out for key %s", action, key)
            raise StorageError(f"Storage {action} timed out for {key!r}") from exc
        except StorageError:
            raise
        except Exception as exc:
            logger.warning("Storage %s failed for key %s: %s", action, key, exc)
            raise StorageError(f"Storage {action} failed for {key!r}") from exc
