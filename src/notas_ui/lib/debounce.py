"""
Asyncio debouncer for search inputs.

A `Debouncer` delays a callable by a fixed quiet period. Starting a new run
while a previous one is still waiting cancels the waiting one, so only the
last call inside the window takes effect.

Usage:
    debouncer = Debouncer(0.3)
    result = await debouncer.run(lambda: apply_search(term))
    if result is None:
        ...  # superseded by a newer keystroke
"""

import asyncio
import inspect
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")


class Debouncer:
    """
    Single-shot, cancellable, last-write-wins timer.

    Attributes:
        delay: Quiet period in seconds.
    """

    def __init__(self, delay: float = 0.3) -> None:
        self.delay = delay
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True while a scheduled call is still waiting to fire."""
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Cancel the waiting call, if any. Its caller receives None."""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def run(self, func: Callable[[], T | Awaitable[T]]) -> T | None:
        """
        Run `func` once the quiet period elapses.

        Args:
            func: Sync or async zero-argument callable.

        Returns:
            The callable's result, or None when a newer call (or `cancel`)
            superseded this one before it fired.
        """
        self.cancel()
        generation = self._generation
        task = asyncio.ensure_future(self._fire(func))
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise
        finally:
            if self._task is task:
                self._task = None

    async def _fire(self, func: Callable[[], T | Awaitable[T]]) -> T:
        await asyncio.sleep(self.delay)
        result = func()
        if inspect.isawaitable(result):
            result = await result
        return result
