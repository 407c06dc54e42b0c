"""Coalescing single-shot timer."""

from typing import Callable

from PyQt6.QtCore import QTimer


class ChangeCoalescer:
    """
    Collapses bursts of triggers into one handler call.

    Unlike a debounce, further triggers while a call is pending do not restart
    the timer: the handler fires once, delay_ms after the first trigger.

    Usage:
        self._coalescer = ChangeCoalescer(delay_ms=0, handler=self.changed.emit)

        def on_field_changed(self):
            self._coalescer.trigger()  # many calls, one emission
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._handler = handler
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._handler)

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def trigger(self):
        """Schedule the handler unless a call is already pending."""
        if not self._timer.isActive():
            self._timer.start()

    def cancel(self):
        """Cancel pending trigger."""
        self._timer.stop()

    def force(self):
        """Fire the handler now if a call is pending."""
        if self._timer.isActive():
            self._timer.stop()
            self._handler()
