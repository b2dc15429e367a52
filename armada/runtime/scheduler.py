"""Clock-driven deferred task scheduler.

Tasks never run on their own: the owner advances the clock from its driving
thread and due callbacks execute synchronously inside ``advance``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from heapq import heappop, heappush

TaskCallback = Callable[[], None]


@dataclass(order=True, slots=True)
class _Task:
    due_seconds: float
    task_id: int
    callback: TaskCallback = field(compare=False)


class Scheduler:
    """One-shot delayed callbacks against a manually advanced clock."""

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_task_id = 1
        self._heap: list[_Task] = []
        self._live: set[int] = set()

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def pending_count(self) -> int:
        return len(self._live)

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule ``callback`` after ``delay_seconds``; return its task id."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        task = _Task(self._now_seconds + delay_seconds, self._next_task_id, callback)
        self._next_task_id += 1
        heappush(self._heap, task)
        self._live.add(task.task_id)
        return task.task_id

    def cancel(self, task_id: int) -> bool:
        """Cancel a task; return whether it was still pending."""
        if task_id not in self._live:
            return False
        self._live.discard(task_id)
        return True

    def cancel_all(self) -> int:
        cancelled = len(self._live)
        self._live.clear()
        self._heap.clear()
        return cancelled

    def advance(self, delta_seconds: float) -> int:
        """Move the clock forward and run due callbacks in due order; return how many ran."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        self._now_seconds += delta_seconds
        executed = 0
        while self._heap and self._heap[0].due_seconds <= self._now_seconds:
            task = heappop(self._heap)
            if task.task_id not in self._live:
                continue
            self._live.discard(task.task_id)
            task.callback()
            executed += 1
        return executed
