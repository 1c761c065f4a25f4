"""
Process-wide serialization of mutating operations.

Breaker mutations and direct lock edits both write locks.used / assigned_to.
Every mutating service function runs under one re-entrant lock so the
read-old-row → write → compensate → audit sequence of one call never
interleaves with another call's. Reads never take the lock.
"""

import threading
from functools import wraps

_write_lock = threading.RLock()


def serialized(func):
    """Run the decorated service function while holding the write lock."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        with _write_lock:
            return func(*args, **kwargs)
    return wrapper
