"""
Input widget ABC contracts.

Normalizes the Qt input widgets a field can wrap, so FormFieldWidget can drive
any of them without duck typing of signal or accessor names
(textChanged vs valueChanged vs currentIndexChanged).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class WidgetValueAccess(ABC):
    """
    ABC for input widgets that read and write a Python value.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the widget.

        Returns:
            The widget's current value. None if no value set.
        """
        pass

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the widget's value.

        Args:
            value: The value to set. None clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for widgets that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class OptionsConfigurable(ABC):
    """
    ABC for widgets that select from a list of FieldOption entries.

    Typically implemented by dropdowns and chip groups.
    """

    @abstractmethod
    def set_options(self, options: list) -> None:
        """
        Replace the selectable options.

        Args:
            options: List of FieldOption
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that emit change signals.

    The callback receives the widget's new value (as returned by get_value()).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        pass
