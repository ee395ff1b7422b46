"""Session change notifications.

A payload-free "session may have changed" signal. Listeners re-read the
persisted record themselves. Dispatch is synchronous and best-effort: a
failing listener is logged and the remaining listeners still run.
"""

from typing import Callable, List

from storefront.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """Explicit subject that session consumers subscribe to."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self) -> None:
        # Snapshot so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.warning(f"Session change listener failed: {type(e).__name__}: {e}", exc_info=True)
