"""
Dismissal veto for windows hosting a form.

A DismissGuard is installed as an event filter on the window containing a
FormBuilder. Before the window closes it consults the veto callback; a False
answer ignores the QCloseEvent and the window stays open.
"""

import logging
from typing import Callable

from PyQt6.QtCore import QEvent, QObject
from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


class DismissGuard(QObject):
    """Event filter that vetoes QCloseEvent when will_pop() returns False."""

    def __init__(self, window: QWidget, will_pop: Callable[[], bool]):
        super().__init__(window)
        self._window = window
        self._will_pop = will_pop
        window.installEventFilter(self)
        logger.debug(f"[DISMISS_GUARD] Installed on {type(window).__name__}")

    def eventFilter(self, obj, event):
        if obj is self._window and event.type() == QEvent.Type.Close:
            if not self._will_pop():
                logger.debug(f"[DISMISS_GUARD] Close of {type(obj).__name__} vetoed")
                event.ignore()
                return True
        return super().eventFilter(obj, event)

    def remove(self) -> None:
        """Uninstall the filter; the window closes unconditionally afterwards."""
        self._window.removeEventFilter(self)
