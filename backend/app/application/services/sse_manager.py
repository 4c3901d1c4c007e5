"""SSE Manager — in-process event broadcaster for real-time state updates."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


class SSEManager:
    """Manages SSE client connections and broadcasts store state changes.

    Each connected client gets its own bounded asyncio.Queue. Broadcasting
    pushes the event to all queues; a client whose queue is full is
    disconnected. Clients consume events via an async generator.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._queues: list[asyncio.Queue[str | None]] = []
        self._max_queue_size = max_queue_size

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Subscribe to SSE events. Yields formatted SSE strings.

        The generator automatically unsubscribes when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._max_queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        """Broadcast an SSE event to all connected clients.

        Synchronous so store listeners can call it directly.
        """
        sse_message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("SSE client queue full — disconnecting")

        for q in dead_queues:
            self._queues.remove(q)
            _drain(q)
            q.put_nowait(None)

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in self._queues:
            _drain(queue)
            queue.put_nowait(None)
        self._queues.clear()

    @property
    def client_count(self) -> int:
        return len(self._queues)


def _drain(queue: asyncio.Queue[str | None]) -> None:
    """Empty a queue so the disconnect sentinel always fits."""
    while not queue.empty():
        queue.get_nowait()
