"""
Sliding window rate limiter.

Tracks recent request timestamps per session identity in process memory.
State is local to one coordinator process: replicas keep independent
windows and a restart clears every counter. A shared counter (for example
a cache service) is required if limits must hold across replicas.

Dependencies: None (stdlib only)
System role: Per-session admission control for the request orchestrator
"""

import threading
from collections import deque


class SlidingWindowRateLimiter:
    """Per-key sliding window limiter over millisecond timestamps."""

    def __init__(self) -> None:
        self._hits: dict[str, deque[int]] = {}
        self._lock = threading.Lock()

    def allow(self, session_id: str, now: int, window_ms: int, max_requests: int) -> bool:
        """
        Record a request for the session if it fits in the window.

        Timestamps at or before ``now - window_ms`` are pruned on every call,
        so no separate cleanup pass is needed.

        Args:
            session_id: Session identity being throttled
            now: Current time in epoch milliseconds
            window_ms: Trailing window length in milliseconds
            max_requests: Requests admitted per window

        Returns:
            bool: True if admitted (and recorded), False if rejected
        """
        window_start = now - window_ms
        with self._lock:
            hits = self._hits.get(session_id)
            if hits is None:
                hits = deque()
            while hits and hits[0] <= window_start:
                hits.popleft()

            if len(hits) >= max_requests:
                self._hits[session_id] = hits
                return False

            hits.append(now)
            self._hits[session_id] = hits
            return True

    def retry_after_ms(self, session_id: str, now: int, window_ms: int) -> int:
        """
        Milliseconds until the oldest recorded request leaves the window.

        Args:
            session_id: Session identity
            now: Current time in epoch milliseconds
            window_ms: Trailing window length in milliseconds

        Returns:
            int: Wait in milliseconds, 0 if nothing is recorded
        """
        with self._lock:
            hits = self._hits.get(session_id)
            if not hits:
                return 0
            return max(0, hits[0] + window_ms - now)

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._hits.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)
