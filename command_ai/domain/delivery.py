"""Paced, per-recipient line delivery.

Each recipient gets its own pending deque and at most one drain task.
Everything runs on the single asyncio loop, so no locks are needed.
"""

from __future__ import annotations

import asyncio
import sys
from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, Hashable, Iterable, Optional

if TYPE_CHECKING:
    from command_ai.ports.outbound import ChatSinkPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class PacedDelivery:
    """Best-effort, order-preserving, at-most-once line delivery.

    Lines for one recipient are sent one at a time with ``delay`` seconds
    between them. Different recipients drain independently.
    """

    def __init__(self, sink: ChatSinkPort, delay: float = 0.15):
        self._sink = sink
        self.delay = delay
        self._queues: Dict[Hashable, Deque[str]] = {}
        self._drains: Dict[Hashable, asyncio.Task] = {}

    def enqueue(self, recipient_id: Hashable, lines: Iterable[str]) -> None:
        """Append lines for a recipient, starting a drain if none is running."""
        new_lines = list(lines)
        if not new_lines:
            return
        queue = self._queues.get(recipient_id)
        if queue is None:
            queue = self._queues[recipient_id] = deque()
        queue.extend(new_lines)

        if not self.is_draining(recipient_id):
            task = asyncio.create_task(self.drain(recipient_id))
            self._drains[recipient_id] = task
            task.add_done_callback(lambda t, rid=recipient_id: self._forget(rid, t))

    def _forget(self, recipient_id: Hashable, task: asyncio.Task):
        if self._drains.get(recipient_id) is task:
            del self._drains[recipient_id]

    async def drain(self, recipient_id: Hashable) -> None:
        """Send queued lines until the recipient's queue is empty."""
        queue = self._queues.get(recipient_id)
        while queue:
            line = queue.popleft()
            try:
                await self._sink.send(recipient_id, line)
            except Exception as e:
                _log(f"[Delivery] WARN send to {recipient_id} failed: {e}")
            if queue:
                await asyncio.sleep(self.delay)
        if queue is not None and self._queues.get(recipient_id) is queue:
            del self._queues[recipient_id]

    def pending(self, recipient_id: Hashable) -> int:
        queue = self._queues.get(recipient_id)
        return len(queue) if queue else 0

    def is_draining(self, recipient_id: Hashable) -> bool:
        task = self._drains.get(recipient_id)
        return task is not None and not task.done()

    @property
    def active_recipients(self) -> int:
        return sum(1 for task in self._drains.values() if not task.done())

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait until every running drain has finished.

        Raises ``asyncio.TimeoutError`` when ``timeout`` runs out; the drains
        keep running either way.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while True:
            tasks = [task for task in self._drains.values() if not task.done()]
            if not tasks:
                return
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                raise asyncio.TimeoutError
            await asyncio.wait(tasks, timeout=remaining)
