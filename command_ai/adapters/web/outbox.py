"""In-memory per-player outbox — implements ChatSinkPort for polling clients.

The game-side script polls ``/chat/outbox/{player_id}`` and prints the
lines it gets with the game's own messaging call.
"""

import sys
import time
from collections import deque
from typing import Deque, Dict, Hashable, List


def _log(msg: str):
    print(msg, file=sys.stderr)


class OutboxSink:
    """Buffers lines per recipient until the game script collects them.

    A full box drops its oldest line. Boxes nobody has written to or polled
    for ``max_idle_seconds`` are evicted on the next send.
    """

    def __init__(self, max_lines: int = 500, max_idle_seconds: float = 600):
        self._max_lines = max_lines
        self._max_idle = max_idle_seconds
        self._boxes: Dict[str, Deque[str]] = {}
        self._touched: Dict[str, float] = {}

    def _evict_stale(self, now: float):
        stale = [key for key, seen in self._touched.items() if now - seen > self._max_idle]
        for key in stale:
            dropped = len(self._boxes.pop(key, ()))
            del self._touched[key]
            if dropped:
                _log(f"[Outbox] WARN evicted {dropped} unread lines for {key}")

    async def send(self, recipient_id: Hashable, text: str) -> None:
        key = str(recipient_id)
        now = time.monotonic()
        self._evict_stale(now)
        box = self._boxes.setdefault(key, deque(maxlen=self._max_lines))
        if len(box) == box.maxlen:
            _log(f"[Outbox] WARN outbox for {key} full, dropping oldest line")
        box.append(text)
        self._touched[key] = now

    def collect(self, recipient_id: Hashable) -> List[str]:
        """Pop every buffered line for one recipient."""
        key = str(recipient_id)
        self._touched.pop(key, None)
        box = self._boxes.pop(key, None)
        return list(box) if box else []

    def pending(self, recipient_id: Hashable) -> int:
        box = self._boxes.get(str(recipient_id))
        return len(box) if box else 0
