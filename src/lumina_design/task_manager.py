"""Lifecycle tracking for cancellable gateway requests."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

ACTIVE_REQUEST = "active_request"


class TaskManager:
    """Run request coroutines as named asyncio tasks that can be cancelled."""

    def __init__(self) -> None:
        self._named: dict[str, asyncio.Task[Any]] = {}

    def start(self, coro: Coroutine[Any, Any, Any], name: str = ACTIVE_REQUEST) -> asyncio.Task[Any]:
        """Schedule ``coro`` under ``name``; the entry is dropped when it finishes.

        A prior task with the same name keeps running; the controller's
        status gate is what rejects overlapping requests.
        """
        task = asyncio.create_task(coro, name=name)
        self._named[name] = task
        task.add_done_callback(lambda done: self._forget(name, done))
        return task

    def _forget(self, name: str, task: asyncio.Task[Any]) -> None:
        if self._named.get(name) is task:
            del self._named[name]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.warning(
                "task.exception",
                extra={
                    "event": "task.exception",
                    "task": name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )

    def get(self, name: str = ACTIVE_REQUEST) -> asyncio.Task[Any] | None:
        return self._named.get(name)

    def is_running(self, name: str = ACTIVE_REQUEST) -> bool:
        task = self._named.get(name)
        return task is not None and not task.done()

    async def cancel(self, name: str = ACTIVE_REQUEST) -> bool:
        """Cancel a named task and wait for it; return True if one was running."""
        task = self._named.pop(name, None)
        if task is None or task.done():
            return False
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return True

    async def cancel_all(self) -> None:
        """Cancel every tracked task and await them all."""
        tasks = [task for task in self._named.values() if not task.done()]
        self._named.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def await_all(self) -> None:
        """Await all tracked tasks without cancelling them."""
        for task in list(self._named.values()):
            if not task.done():
                try:
                    await task
                except asyncio.CancelledError:
                    pass
