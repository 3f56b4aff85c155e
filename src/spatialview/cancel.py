"""Cooperative cancellation shared by decomposition, transform, render and hit-test loops."""
from typing import Optional
import threading


class CancellationToken:
    """Polled cancellation flag.

    Loops check `cancelled` at each feature, ring, point or corner boundary
    and stop there; nothing is preempted.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self):
        return f'{type(self).__name__}(cancelled={self.cancelled})'


class LinkedToken(CancellationToken):
    """Token that also reads as cancelled once any of its sources is.

    Cancelling the linked token itself leaves the sources untouched.
    """

    def __init__(self, *sources: Optional[CancellationToken]):
        super().__init__()
        self._sources = tuple(t for t in sources if t is not None)

    @property
    def cancelled(self) -> bool:
        return super().cancelled or any(t.cancelled for t in self._sources)
