"""Cancellable opponent "thinking" delay feeding a serialized command queue."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from armada.runtime.scheduler import Scheduler


@dataclass(frozen=True, slots=True)
class RunOpponentTurn:
    """Command: let the opponent fire, if ``generation`` is still current."""

    generation: int


class CommandQueue:
    """FIFO of commands consumed by the single driving thread."""

    def __init__(self) -> None:
        self._commands: deque[RunOpponentTurn] = deque()

    def __len__(self) -> int:
        return len(self._commands)

    def push(self, command: RunOpponentTurn) -> None:
        self._commands.append(command)

    def drain(self) -> list[RunOpponentTurn]:
        commands = list(self._commands)
        self._commands.clear()
        return commands

    def clear(self) -> None:
        self._commands.clear()


class OpponentTurnScheduler:
    """Delays opponent turns on a manually advanced clock."""

    def __init__(
        self,
        delay_seconds: float,
        *,
        scheduler: Scheduler | None = None,
        queue: CommandQueue | None = None,
    ) -> None:
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        self._delay_seconds = delay_seconds
        self._scheduler = scheduler or Scheduler()
        self._queue = queue or CommandQueue()
        self._task_ids: set[int] = set()

    @property
    def has_pending(self) -> bool:
        return bool(self._task_ids) or len(self._queue) > 0

    def schedule(self, generation: int) -> int:
        """Enqueue a ``RunOpponentTurn`` once the delay elapses."""
        task_id = 0

        def _fire() -> None:
            self._task_ids.discard(task_id)
            self._queue.push(RunOpponentTurn(generation))

        task_id = self._scheduler.call_later(self._delay_seconds, _fire)
        self._task_ids.add(task_id)
        return task_id

    def cancel_pending(self) -> int:
        """Cancel delayed turns and drop queued ones; return how many were dropped."""
        dropped = len(self._queue)
        for task_id in self._task_ids:
            if self._scheduler.cancel(task_id):
                dropped += 1
        self._task_ids.clear()
        self._queue.clear()
        return dropped

    def advance(self, delta_seconds: float) -> list[RunOpponentTurn]:
        """Advance the clock and return commands that became due, oldest first."""
        self._scheduler.advance(delta_seconds)
        return self._queue.drain()
