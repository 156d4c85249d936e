"""Backend implementations for seed statement execution."""

from bulkseed.backends.base import Backend
from bulkseed.backends.direct import ConnectionBackend, PoolBackend
from bulkseed.backends.memory import MemoryBackend, UndefinedTableError

__all__ = [
    "Backend",
    "ConnectionBackend",
    "MemoryBackend",
    "PoolBackend",
    "UndefinedTableError",
]
