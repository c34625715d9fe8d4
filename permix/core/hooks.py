"""
Synchronous named-event registry.
"""

from typing import Any, Callable, Dict, List

from shared.logging import get_logger

Listener = Callable[..., Any]


class HookBus:
    """Ordered listener lists keyed by event name.

    Dispatch is synchronous and in registration order. A listener that raises
    propagates to the caller of ``call_hook``; listeners that re-enter the
    owning engine (for example by calling ``setup``) do so at the caller's risk.
    """

    def __init__(self):
        self.logger = get_logger("permix.hooks")
        self._hooks: Dict[str, List[Listener]] = {}

    def hook(self, name: str, fn: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._hooks.setdefault(name, []).append(fn)

        def unregister() -> None:
            self.remove_hook(name, fn)

        return unregister

    def hook_once(self, name: str, fn: Listener) -> Callable[[], None]:
        """Register a listener that removes itself after its first call."""
        unregister: Callable[[], None]

        def once(*args, **kwargs):
            unregister()
            return fn(*args, **kwargs)

        unregister = self.hook(name, once)
        return unregister

    def remove_hook(self, name: str, fn: Listener) -> None:
        """Remove one registration of ``fn``; unknown listeners are ignored."""
        listeners = self._hooks.get(name)
        if not listeners:
            return

        # Identity, not equality: bound methods compare equal across instances
        for index, listener in enumerate(listeners):
            if listener is fn:
                del listeners[index]
                break

        if not listeners:
            del self._hooks[name]

    def clear_hook(self, name: str) -> None:
        """Remove every listener for one event."""
        self._hooks.pop(name, None)

    def clear_all_hooks(self) -> None:
        """Remove every listener for every event."""
        self._hooks.clear()

    def call_hook(self, name: str, *args: Any) -> None:
        """Invoke the listeners registered for ``name`` at the time of the call."""
        if not self.listener_count(name):
            return

        listeners = self._hooks[name]
        self.logger.debug("Calling hook", hook=name, listeners=len(listeners))

        # Snapshot so hook_once removals do not skip the next listener
        for listener in list(listeners):
            listener(*args)

    def listener_count(self, name: str) -> int:
        """Number of listeners currently registered for ``name``."""
        return len(self._hooks.get(name, ()))
