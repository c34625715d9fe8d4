"""
One-shot readiness signal.
"""

import asyncio


class ReadinessGate:
    """Completion signal that opens once and is never re-armed.

    All waiters share one ``asyncio.Event`` and are released together. There is
    no timeout; callers wrap ``wait`` in ``asyncio.wait_for`` if they need one.
    """

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def is_resolved(self) -> bool:
        return self._event.is_set()

    def resolve(self) -> bool:
        """Open the gate. Returns True only for the call that opened it."""
        if self._event.is_set():
            return False
        self._event.set()
        return True

    async def wait(self) -> None:
        """Suspend until the gate opens; returns at once if it already has."""
        await self._event.wait()
