# timeline/scheduler.py
import heapq, itertools, time
from typing import Callable, List, Tuple

class Scheduler:
    """Fire-and-forget timers for a single-threaded loop.

    call_later() never blocks; run_due() is called from the main loop and
    fires every callback whose deadline has passed, earliest first
    (same deadline: in scheduling order). Deadlines are clock seconds.
    """
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._heap: List[Tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def pending(self) -> bool:
        return bool(self._heap)

    def call_later(self, delay_ms: float, fn: Callable[[], None]) -> float:
        due = self.clock() + max(0.0, delay_ms) / 1000.0
        heapq.heappush(self._heap, (due, next(self._seq), fn))
        return due

    def run_due(self) -> int:
        now = self.clock()
        fired = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, fn = heapq.heappop(self._heap)
            fn()
            fired += 1
        return fired

    def cancel_all(self) -> int:
        n = len(self._heap)
        self._heap.clear()
        return n
