"""Session status gate with lock-protected transitions."""

from __future__ import annotations

import asyncio

from .models import Session, Status


class StateManager:
    """Single-slot admission gate over ``Session.status``.

    The status lives on the session so the UI can read it synchronously;
    every write goes through this manager so that check-and-set happens
    under one lock acquisition.
    """

    def __init__(self, session: Session) -> None:
        self._lock = asyncio.Lock()
        self._session = session

    @property
    def status(self) -> Status:
        return self._session.status

    async def transition_to(self, new_state: Status) -> Status:
        """Unconditionally move to ``new_state`` and return it."""
        async with self._lock:
            self._session.status = new_state
            return self._session.status

    async def transition_if(self, expected_state: Status, new_state: Status) -> bool:
        """Transition only when the current status matches ``expected_state``."""
        async with self._lock:
            if self._session.status != expected_state:
                return False
            self._session.status = new_state
            return True
