# -*- coding: utf-8 -*-

import heapq
import itertools
from typing import Any, Callable, List, Protocol, Tuple


class Scheduler(Protocol):
    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class VirtualScheduler:
    """
    Deterministic scheduler on a virtual millisecond clock.
    Nothing fires until advance() moves the clock past a due time.
    """

    def __init__(self):
        self.now_ms = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int]] = []
        self._callbacks = {}

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._seq)
        due = self.now_ms + max(0, int(delay_ms))
        heapq.heappush(self._queue, (due, handle))
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._callbacks)

    def advance(self, ms: int) -> None:
        target = self.now_ms + int(ms)
        while self._queue and self._queue[0][0] <= target:
            due, handle = heapq.heappop(self._queue)
            cb = self._callbacks.pop(handle, None)
            if cb is None:
                # cancelled
                continue
            self.now_ms = due
            cb()
        self.now_ms = target

    def advance_seconds(self, seconds: float) -> None:
        self.advance(int(round(seconds * 1000)))

    def run_until_idle(self, limit_ms: int = 24 * 3600 * 1000) -> None:
        end = self.now_ms + limit_ms
        while self._callbacks and self.now_ms < end:
            while self._queue and self._queue[0][1] not in self._callbacks:
                heapq.heappop(self._queue)
            if not self._queue:
                break
            self.advance(self._queue[0][0] - self.now_ms)
