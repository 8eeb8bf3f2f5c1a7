# search/frontier.py
import heapq
from dataclasses import dataclass


@dataclass
class FrontierEntry:
    previous: int | None  # None only for the seed entry
    target: int
    f: float  # ordering key
    g: float = 0.0  # path cost from start; goal-directed mode only


class Frontier:
    """
    Min-queue of pending expansions ordered by ``f``.

    Equal keys pop in push order (a sequence number sits next to ``f`` in
    the heap). There is no decrease-key: a vertex may be queued several
    times and the engine drops entries whose target is already closed when
    they surface.
    """

    def __init__(self):
        self._q: list[tuple[float, int, FrontierEntry]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._q)

    @property
    def pushed(self) -> int:
        return self._seq

    def push(self, entry: FrontierEntry) -> None:
        self._seq += 1
        heapq.heappush(self._q, (entry.f, self._seq, entry))

    def pop(self) -> FrontierEntry | None:
        if not self._q:
            return None
        return heapq.heappop(self._q)[2]
