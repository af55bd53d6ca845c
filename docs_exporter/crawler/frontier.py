"""
Crawl frontier.

FIFO queue of URLs awaiting link discovery plus the set of URLs already
visited. Only the single crawl loop touches it, so there is no locking.
"""

from collections import deque
from typing import Deque, FrozenSet, Iterable, Optional, Set


class Frontier:
    """Breadth-first work queue that hands out each URL at most once."""

    def __init__(self, seeds: Iterable[str] = ()):
        self._queue: Deque[str] = deque()
        self._queued: Set[str] = set()
        self._visited: Set[str] = set()

        for url in seeds:
            self.enqueue_if_new(url)

    def enqueue_if_new(self, url: str) -> bool:
        """
        Queue a URL unless it was already visited or is already waiting.

        Returns:
            True if the URL was added
        """
        if url in self._visited or url in self._queued:
            return False
        self._queue.append(url)
        self._queued.add(url)
        return True

    def dequeue(self) -> Optional[str]:
        """Pop the oldest queued URL, or None when the frontier is empty."""
        if not self._queue:
            return None
        url = self._queue.popleft()
        self._queued.discard(url)
        return url

    def mark_visited(self, url: str) -> None:
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    @property
    def visited(self) -> FrozenSet[str]:
        return frozenset(self._visited)

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
