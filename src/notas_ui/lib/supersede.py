"""
Request supersession for data fetches.

Every fetch takes a token from `LatestRequest.begin()`. When the response
arrives the caller checks `is_current(token)`; a response whose token is no
longer the latest is stale and must be dropped, so a slow old request can
never overwrite the state produced by a newer one.
"""

import itertools


class LatestRequest:
    """Issues monotonically increasing tokens and remembers the newest."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0

    def begin(self) -> int:
        """Start a new request and return its token."""
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def invalidate(self) -> None:
        """Mark every in-flight request as stale (e.g. on teardown)."""
        self._latest = next(self._counter)
