# domain/graph/priority_queue.py
import heapq
from collections.abc import Hashable


class PriorityQueue:
    """
    Min-priority queue with re-keying.
    Enqueuing an item that is already queued replaces its entry; stale heap
    entries are invalidated in place and skipped on dequeue.
    """

    def __init__(self):
        self._heap: list[list] = []
        self._live: dict[Hashable, list] = {}
        self._seq = 0

    def enqueue(self, item: Hashable, priority: float) -> None:
        old = self._live.pop(item, None)
        if old is not None:
            old[-1] = False
        self._seq += 1
        entry = [priority, self._seq, item, True]
        self._live[item] = entry
        heapq.heappush(self._heap, entry)

    def dequeue(self) -> Hashable:
        while self._heap:
            _, _, item, valid = heapq.heappop(self._heap)
            if valid:
                del self._live[item]
                return item
        raise IndexError("dequeue from empty PriorityQueue")

    def is_empty(self) -> bool:
        return not self._live

    def priority(self, item: Hashable) -> float:
        return self._live[item][0]

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, item) -> bool:
        return item in self._live
