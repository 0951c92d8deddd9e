import asyncio
from collections import defaultdict
from typing import Any, AsyncIterator, Dict, List


class AsyncTopicBroker:
    def __init__(self) -> None:
        self._topics: Dict[str, List[asyncio.Queue]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def publish(self, topic: str, message: Any) -> int:
        """Fan a message out to every subscriber of ``topic``.

        Returns how many subscribers were full and missed it.
        """
        async with self._lock:
            queues = list(self._topics.get(topic, []))
        dropped = 0
        for q in queues:
            # Slow clients lose frames rather than stall the tick loop
            if q.full():
                dropped += 1
            else:
                q.put_nowait(message)
        return dropped

    async def subscribe(self, topic: str, max_queue: int = 100) -> AsyncIterator[Any]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue)
        async with self._lock:
            self._topics[topic].append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            async with self._lock:
                if queue in self._topics[topic]:
                    self._topics[topic].remove(queue)


BUS = AsyncTopicBroker()
