from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from ..core.exceptions import DatastoreTimeoutError


@contextmanager
def bounded_lock(lock: threading.Lock, timeout_seconds: float, *, resource: str) -> Iterator[None]:
    """Hold `lock` for the block, giving up after `timeout_seconds`."""
    if not lock.acquire(timeout=timeout_seconds):
        raise DatastoreTimeoutError(f"Timed out after {timeout_seconds:g}s waiting for {resource}")
    try:
        yield
    finally:
        lock.release()
