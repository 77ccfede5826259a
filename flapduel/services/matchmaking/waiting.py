from collections import OrderedDict
from typing import Iterator, List, Optional, Tuple


class WaitingQueue:
    """Connections waiting for a peer, oldest first. Each id appears once."""

    def __init__(self):
        self._entries: 'OrderedDict[str, None]' = OrderedDict()

    def push(self, sid: str) -> bool:
        if sid in self._entries:
            return False
        self._entries[sid] = None
        return True

    def pop_oldest(self) -> Optional[str]:
        if not self._entries:
            return None
        sid, _ = self._entries.popitem(last=False)
        return sid

    def discard(self, sid: str) -> bool:
        if sid not in self._entries:
            return False
        del self._entries[sid]
        return True

    def snapshot(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, sid) -> bool:
        return sid in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class Matchmaker:
    """Strict FIFO pairing: no priority, skill or locale weighting."""

    def __init__(self, queue: Optional[WaitingQueue] = None):
        self.queue = queue if queue is not None else WaitingQueue()

    def enqueue(self, sid: str) -> bool:
        return self.queue.push(sid)

    def remove(self, sid: str) -> bool:
        return self.queue.discard(sid)

    def pairs(self) -> Iterator[Tuple[str, str]]:
        """Yield (player 1, player 2) pairs while at least two are waiting."""
        while len(self.queue) >= 2:
            first = self.queue.pop_oldest()
            second = self.queue.pop_oldest()
            yield first, second
