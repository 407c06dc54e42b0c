"""
Field ABC contracts for the form state coordinator.

Defines the explicit capability set every field must implement to be hosted
by a FormState. The coordinator only ever talks to fields through these
contracts; it never reaches into widgets.

Design Philosophy:
- Explicit inheritance over duck typing
- One ABC per capability, composed by multiple inheritance
- Fail-loud over fail-silent
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, MutableMapping, Optional


class ValueGettable(ABC):
    """
    ABC for fields that expose their current value.
    """

    @property
    @abstractmethod
    def value(self) -> Any:
        """
        Current value held by the field.

        Returns:
            The field's value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """
    ABC for fields that accept a value.

    Two entry points exist because the coordinator needs to distinguish a
    silent population (registration) from an external change (patch/reset).
    """

    @abstractmethod
    def set_value(self, value: Any, populate_form: bool = True) -> None:
        """
        Set the field's value.

        Args:
            value: The value to set. None clears the field.
            populate_form: When False, the form's value store is not written.
        """
        pass

    @abstractmethod
    def did_change(self, value: Any) -> None:
        """
        Accept an external value change.

        Runs the full change pipeline: store update, autovalidation and
        change callbacks.
        """
        pass


class Validatable(ABC):
    """ABC for fields that validate their own value."""

    @abstractmethod
    def validate(self) -> bool:
        """
        Run the field's validator and update its error state.

        Returns:
            True if the field is valid
        """
        pass

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        pass

    @property
    @abstractmethod
    def has_error(self) -> bool:
        pass

    @property
    @abstractmethod
    def error_text(self) -> Optional[str]:
        pass

    @abstractmethod
    def invalidate(self, error_text: str) -> None:
        """
        Force the field into an invalid state, bypassing its validator.

        Args:
            error_text: Message to display (e.g. a server-side error)
        """
        pass


class Resettable(ABC):
    """ABC for fields that can restore their initial value."""

    @property
    @abstractmethod
    def initial_value(self) -> Any:
        """Field-local initial value, falling back to the form's initial map."""
        pass

    @abstractmethod
    def reset(self) -> None:
        pass


class Focusable(ABC):
    """ABC for fields that can receive input focus."""

    @abstractmethod
    def request_focus(self) -> None:
        pass


class Savable(ABC):
    """ABC for fields with a local save hook."""

    @abstractmethod
    def save(self) -> None:
        """Commit any buffered edit into the form's value store."""
        pass


class TransformerProvider(ABC):
    """
    ABC for fields that may contribute a value transformer.

    The coordinator calls register_transformer() exactly once per registration.
    """

    @abstractmethod
    def register_transformer(self, registry: MutableMapping[str, Callable[[Any], Any]]) -> None:
        """
        Install this field's transformer under its name, or clear any
        transformer left there by a replaced field if it has none.

        Args:
            registry: Mutable mapping name -> transformer owned by the form
        """
        pass


class FormField(ValueGettable, ValueSettable, Validatable, Resettable,
                Focusable, Savable, TransformerProvider):
    """
    Complete capability set a FormState can host.

    Fields own their enablement; the form-wide enabled/skip_disabled options
    are inputs fields are expected to honor, never overridden by the form.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def enabled(self) -> bool:
        pass
