"""
Revert timers for control labels.

One pending task per key. Scheduling a key again cancels the earlier task
first, so a second success within the delay restarts the countdown.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Scheduler(Protocol):
    def schedule(self, key: str, delay: float, callback: Callback) -> None: ...

    def cancel(self, key: str) -> bool: ...


class AsyncioScheduler:
    """
    Runs callbacks on the event loop via ``loop.call_later``.

    The loop is the one passed in, else the loop running when the scheduler
    is built, else the loop running when ``schedule`` is first called.
    Scheduling with none of these available raises RuntimeError, so a
    controller using this scheduler (the default) must either be built
    inside a running loop or be given an explicit loop before ``copy_link``
    is called from synchronous code.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
        self._loop = loop
        self._handles: Dict[str, asyncio.TimerHandle] = {}

    def schedule(self, key: str, delay: float, callback: Callback) -> None:
        self.cancel(key)
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop or an explicit loop"
                ) from None
        self._handles[key] = self._loop.call_later(delay, self._fire, key, callback)

    def cancel(self, key: str) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def pending(self) -> List[str]:
        return list(self._handles)

    def _fire(self, key: str, callback: Callback) -> None:
        self._handles.pop(key, None)
        try:
            callback()
        except Exception:
            logger.exception("Revert timer %s failed", key)


@dataclass(order=True)
class _ManualTask:
    due: float
    seq: int
    key: str = field(compare=False)
    callback: Callback = field(compare=False)


class ManualScheduler:
    """
    Virtual clock. Nothing fires until ``advance`` moves time past a task's
    due time; tasks fire in due order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._tasks: Dict[str, _ManualTask] = {}

    def schedule(self, key: str, delay: float, callback: Callback) -> None:
        self.cancel(key)
        self._seq += 1
        self._tasks[key] = _ManualTask(self.now + delay, self._seq, key, callback)

    def cancel(self, key: str) -> bool:
        return self._tasks.pop(key, None) is not None

    def pending(self) -> List[str]:
        return sorted(self._tasks, key=lambda k: self._tasks[k])

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every task that became due."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self._tasks.values() if t.due <= target]
            if not due:
                break
            task = min(due)
            del self._tasks[task.key]
            self.now = task.due
            task.callback()
            fired += 1
        self.now = target
        return fired
