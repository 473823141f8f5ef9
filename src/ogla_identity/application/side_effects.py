"""Deferred, failure-isolated side effects.

Services submit audit writes and notification emails here instead of
awaiting them. The presentation layer dispatches the queue once the
request's unit of work has finished; a failing effect is logged and
never reaches the caller.

Effects describe committed state by default and are dropped when the
unit of work rolls back. Effects submitted with ``submit_always`` (audits
of rejected attempts) run either way.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

# Strong references to running dispatch tasks; the event loop keeps only weak ones
_background_tasks: set[asyncio.Task] = set()


@dataclass(frozen=True)
class _Effect:
    name: str
    run: Callable[[], Awaitable[Any]]
    needs_commit: bool


class SideEffectQueue:
    """Collects side effects and runs them after the primary operation."""

    def __init__(self) -> None:
        self._effects: list[_Effect] = []

    def __len__(self) -> int:
        return len(self._effects)

    def submit(
        self,
        name: str,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Queue a coroutine function call that depends on the commit."""
        self._effects.append(_Effect(name, lambda: func(*args, **kwargs), True))

    def submit_blocking(
        self,
        name: str,
        func: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Queue a blocking call that depends on the commit; runs in a thread."""
        self._effects.append(
            _Effect(name, lambda: asyncio.to_thread(func, *args, **kwargs), True),
        )

    def submit_always(
        self,
        name: str,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Queue a coroutine function call that survives a rollback."""
        self._effects.append(_Effect(name, lambda: func(*args, **kwargs), False))

    def rollback(self) -> None:
        """Drop the effects that depend on the rolled back unit of work."""
        dropped = [effect.name for effect in self._effects if effect.needs_commit]
        if dropped:
            logger.info("Dropping side effects after rollback: %s", dropped)
        self._effects = [e for e in self._effects if not e.needs_commit]

    async def flush(self) -> None:
        """Run every queued effect in submission order."""
        effects, self._effects = self._effects, []
        for effect in effects:
            try:
                await effect.run()
            except Exception:
                logger.exception("Side effect failed: %s", effect.name)

    def dispatch(self) -> asyncio.Task | None:
        """Flush in a background task on the running loop."""
        if not len(self):
            return None
        task = asyncio.create_task(self.flush())
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        return task
