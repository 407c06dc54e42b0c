"""
Signal blocking helpers.

Used when the form pushes a value into an input widget: the widget must show
the new value without echoing a change signal back into the form.
"""

from contextlib import contextmanager
import logging

from PyQt6.QtCore import QObject

logger = logging.getLogger(__name__)


class SignalService:
    """
    Examples:
        with SignalService.block_signals(line_edit):
            line_edit.setText("x")

        with SignalService.block_signals(widget1, widget2):
            widget1.setValue(1)
            widget2.setValue(2)
    """

    @staticmethod
    @contextmanager
    def block_signals(*objects: QObject):
        """Block signals on each object, restoring the previous blocking state on exit."""
        previous = []
        for obj in objects:
            if obj is not None:
                previous.append((obj, obj.blockSignals(True)))
                logger.debug(f"Blocked signals on {type(obj).__name__}")

        try:
            yield
        finally:
            for obj, was_blocked in reversed(previous):
                obj.blockSignals(was_blocked)

