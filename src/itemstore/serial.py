"""
Single-writer decorator: every wrapped method runs under the owner's
re-entrant lock, so store operations never interleave on the connection.
"""

from functools import wraps


def serialized(fn):
    """Run ``fn`` while holding ``self._lock``."""

    @wraps(fn)
    def inner(self, *args, **kwargs):
        with self._lock:
            return fn(self, *args, **kwargs)

    return inner
