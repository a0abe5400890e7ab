# core/cancellation.py
import threading

from core.exceptions import ParseCancelledError


class CancellationToken:
    """Cooperative cancellation flag checked by the data parser between lines."""
    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ParseCancelledError("Reading of network data was cancelled.")

    def __repr__(self):
        return f"<CancellationToken cancelled={self.cancelled}>"
