"""
MiniDB Transaction Ids
======================
Every transaction gets an id from one process-wide counter.
Ids are unique and strictly increasing for the life of the process;
allocation is serialized by a module-level lock.
"""

import threading

_counter_lock = threading.Lock()
_next_id = 0


def _allocate() -> int:
    global _next_id
    with _counter_lock:
        txn_id = _next_id
        _next_id += 1
    return txn_id


def reset_counter(start: int = 0) -> None:
    """Restart id allocation at `start` (for testing)."""
    global _next_id
    with _counter_lock:
        _next_id = start


class TransactionId:
    """Immutable identifier of a single transaction."""

    __slots__ = ("_id",)

    def __init__(self):
        self._id = _allocate()

    @property
    def id(self) -> int:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionId):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"TransactionId({self._id})"
