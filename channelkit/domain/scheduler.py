"""Refresh scheduling — cancellable, restartable repeating timers on asyncio.

A ``Task`` is "armed" while it waits for its delay to elapse. Cancelling
disarms it; a callback that is already running is left to finish.
"""

import asyncio
import sys
from typing import Awaitable, Callable, List, Optional, Set

Callback = Callable[[], Awaitable[None]]


def _log(msg: str):
    print(msg, file=sys.stderr)


class Task:
    """A single scheduled callback owned by a ``Scheduler``."""

    def __init__(self, scheduler: "Scheduler", delay: float, callback: Callback, repeat: bool = True, name: str = "task"):
        self._scheduler = scheduler
        self.delay = delay
        self.repeat = repeat
        self.name = name
        self._callback = callback
        self._timer: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()  # callbacks in flight, kept referenced

    @property
    def running(self) -> bool:
        """True while the timer is armed."""
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> bool:
        return bool(self._running)

    def start(self) -> None:
        """Arm the timer. No-op when already armed or the scheduler is shut down."""
        if self._scheduler.is_shutdown or self.running:
            return
        self._timer = asyncio.create_task(self._wait_and_fire())

    def cancel(self) -> None:
        """Disarm the timer without interrupting a running callback."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def restart(self) -> None:
        self.cancel()
        self.start()

    async def _wait_and_fire(self):
        await asyncio.sleep(self.delay)

        current = asyncio.current_task()
        if self._timer is current:
            self._timer = None
        if current is not None:
            self._running.add(current)

        try:
            await self._callback()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            _log(f"[scheduler:{self.name}] callback failed: {e}")
        finally:
            if current is not None:
                self._running.discard(current)

        if self.repeat:
            self.start()


class Scheduler:
    """Owns a set of tasks; ``shutdown()`` cancels them all and refuses new arming."""

    def __init__(self):
        self._tasks: List[Task] = []
        self._shutdown = False

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def schedule(
        self,
        delay: float,
        callback: Callback,
        start_now: bool = True,
        repeat: bool = True,
        name: str = "task",
    ) -> Task:
        """Create a task firing ``callback`` every ``delay`` seconds.

        With ``start_now=False`` the task is created disarmed; call
        ``Task.start()`` to arm it.
        """
        if self._shutdown:
            raise RuntimeError("Scheduler has been shut down")
        if delay <= 0:
            raise ValueError(f"delay must be positive, got {delay}")
        task = Task(self, delay, callback, repeat=repeat, name=name)
        self._tasks.append(task)
        if start_now:
            task.start()
        return task

    def remove(self, task: Task) -> None:
        task.cancel()
        if task in self._tasks:
            self._tasks.remove(task)

    def shutdown(self) -> None:
        """Cancel every task. Safe to call more than once."""
        self._shutdown = True
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
