"""Broadcast pipeline snapshots to observers."""

import asyncio
import logging

from .models import PipelineSnapshot

logger = logging.getLogger(__name__)

# Snapshots buffered per subscriber before the oldest are dropped
SUBSCRIBER_QUEUE_SIZE = 16


class LookupProgressTracker:
    """Fan out published snapshots to subscriber queues.

    Each snapshot is complete, so a subscriber that falls behind loses
    its oldest pending snapshots rather than blocking the pipeline.
    """

    def __init__(self, queue_size: int = SUBSCRIBER_QUEUE_SIZE):
        self.queue_size = queue_size
        self._subscribers: list[asyncio.Queue] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Subscribe to snapshot updates."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue):
        """Unsubscribe from snapshot updates."""
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    def broadcast(self, snapshot: PipelineSnapshot):
        """Broadcast a snapshot to all subscribers without suspending."""
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
                logger.debug(f"Subscriber lagging, dropped a snapshot before #{snapshot.query_id}")
            queue.put_nowait(snapshot)
