"""Per-key locks that serialize read-modify-write cycles on one record.

Carts are serialized per identity, stock counters per product and orders per
order id. There is no global lock: operations on different keys never wait on
each other. A key's lock lives only while someone holds or waits for it.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


class KeyedLocks:
    """A registry of re-entrant locks, one per key in use."""

    def __init__(self, name: str):
        self.name = name
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _acquire_entry(self, key: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1
            return entry

    def _release_entry(self, key: str, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        key = str(key)
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)


cart_locks = KeyedLocks("cart")
stock_locks = KeyedLocks("stock")
order_locks = KeyedLocks("order")
