"""
Per-field state: the stock FormField implementation.

A FieldState holds one field's value, error and enablement, and talks to its
FormState through the injected form reference. It is widget-agnostic;
FormFieldWidget binds it to a Qt input adapter.
"""

import logging
from typing import Any, Callable, MutableMapping, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formbuilder.exceptions import MissingFormError
from pyqt_formbuilder.protocols.field_protocols import FormField
from pyqt_formbuilder.protocols.form_config import AutovalidateMode
from pyqt_formbuilder.protocols.widget_adapters import PyQtWidgetMeta

from .field_registry import RegistrationResult, UnregistrationResult
from .form_state import FormState

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Optional[str]]


class FieldState(QObject, FormField, metaclass=PyQtWidgetMeta):
    """
    One named field hosted by a FormState.

    Args:
        name: Field name, unique within the form
        form: FormState to register with (explicit injection, no tree lookup)
        initial_value: Field-local initial value; None falls back to the
            form's initial_value map
        validator: Returns an error message, or None when the value is valid
        value_transformer: Applied by the form when values are read
        on_changed: Called with the new value after every change
        on_saved: Called with the value when the form saves
        on_reset: Called after the field reset to its initial value
        enabled: Field-local enabled flag (combined with the form's)
        autovalidate_mode: None uses the form's mode

    Signals:
        value_changed(object): The field's value was set
        error_changed(object): Error text changed (None when cleared)
        focus_requested: The form asked this field to take input focus
        enabled_changed(bool): Effective enabled state may have changed
    """

    value_changed = pyqtSignal(object)
    error_changed = pyqtSignal(object)
    focus_requested = pyqtSignal()
    enabled_changed = pyqtSignal(bool)

    def __init__(
        self,
        name: str,
        form: Optional[FormState] = None,
        *,
        initial_value: Any = None,
        validator: Optional[Validator] = None,
        value_transformer: Optional[Callable[[Any], Any]] = None,
        on_changed: Optional[Callable[[Any], None]] = None,
        on_saved: Optional[Callable[[Any], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
        enabled: bool = True,
        autovalidate_mode: Optional[AutovalidateMode] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._name = name
        self._form = form
        self._initial_value = initial_value
        self._validator = validator
        self._value_transformer = value_transformer
        self._on_changed = on_changed
        self._on_saved = on_saved
        self._on_reset = on_reset
        self._enabled = enabled
        self._autovalidate_mode = autovalidate_mode

        self._value: Any = None
        self._error_text: Optional[str] = None
        self._custom_error_text: Optional[str] = None
        self._has_interacted = False
        self._attached = False
        self._form_disposed = False

    def _require_form(self, operation: str) -> FormState:
        if self._form is None:
            raise MissingFormError(self._name, operation)
        return self._form

    # ========== IDENTITY / CONFIG ==========

    @property
    def name(self) -> str:
        return self._name

    @property
    def form(self) -> Optional[FormState]:
        return self._form

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def effective_enabled(self) -> bool:
        """Own flag combined with the form-wide flag."""
        return self._enabled and (self._form is None or self._form.enabled)

    @property
    def autovalidate_mode(self) -> AutovalidateMode:
        if self._autovalidate_mode is not None:
            return self._autovalidate_mode
        if self._form is not None:
            return self._form.autovalidate_mode
        return AutovalidateMode.DISABLED

    @property
    def has_interacted(self) -> bool:
        return self._has_interacted

    # ========== LIFECYCLE ==========

    def attach(self) -> RegistrationResult:
        """Register with the injected form."""
        form = self._require_form("attach")
        result = form.register_field(self._name, self)
        self._attached = True
        self._form_disposed = False
        form.enabled_changed.connect(self._on_form_enabled_changed)
        form.form_disposed.connect(self._on_form_disposed)
        if form.skip_disabled and not self.effective_enabled:
            form.remove_internal_field_value(self._name, notify=False)
        self.enabled_changed.emit(self.effective_enabled)
        return result

    def detach(self) -> Optional[UnregistrationResult]:
        """Unregister from the form. No-op if not attached."""
        if not self._attached:
            return None
        form = self._require_form("detach")
        self._disconnect_form(form)
        return form.unregister_field(self._name, self)

    def _disconnect_form(self, form: FormState) -> None:
        self._attached = False
        for signal, slot in ((form.enabled_changed, self._on_form_enabled_changed),
                             (form.form_disposed, self._on_form_disposed)):
            try:
                signal.disconnect(slot)
            except (TypeError, RuntimeError):
                # Not connected, or the form was already deleted by Qt
                pass

    def _on_form_disposed(self) -> None:
        self._disconnect_form(self._form)
        self._form_disposed = True
        logger.debug(f"[FIELD] '{self._name}' detached by form dispose")

    # ========== VALUE ==========

    @property
    def value(self) -> Any:
        return self._value

    @property
    def initial_value(self) -> Any:
        if self._initial_value is not None:
            return self._initial_value
        if self._form is not None:
            return self._form.initial_value.get(self._name)
        return None

    def set_value(self, value: Any, populate_form: bool = True) -> None:
        self._value = value
        if populate_form:
            self._populate_form(notify=True)
        self.value_changed.emit(value)

    def did_change(self, value: Any) -> None:
        in_reset = self._form is not None and self._form.in_reset
        if not in_reset:
            self._has_interacted = True
        self.set_value(value)
        if not in_reset:
            self._autovalidate()
        if self._on_changed is not None:
            self._on_changed(value)

    def _populate_form(self, notify: bool) -> None:
        form = self._require_form("write its value to the form")
        if self._form_disposed:
            return
        if form.skip_disabled and not self.effective_enabled:
            form.remove_internal_field_value(self._name, notify=notify)
        else:
            form.set_internal_field_value(self._name, self._value, notify=notify)

    def register_transformer(self, registry: MutableMapping[str, Callable[[Any], Any]]) -> None:
        if self._value_transformer is not None:
            registry[self._name] = self._value_transformer
        else:
            registry.pop(self._name, None)

    def save(self) -> None:
        if self._form is not None:
            self._populate_form(notify=False)
        if self._on_saved is not None:
            self._on_saved(self._value)

    # ========== ENABLEMENT ==========

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        self._on_enablement_changed()

    def _on_form_enabled_changed(self, _enabled: bool) -> None:
        self._on_enablement_changed()

    def _on_enablement_changed(self) -> None:
        self.enabled_changed.emit(self.effective_enabled)
        # skip_disabled: disabled fields leave the value map, re-enabled ones rejoin
        if self._attached and self._form.skip_disabled:
            self._populate_form(notify=True)

    # ========== VALIDATION ==========

    @property
    def error_text(self) -> Optional[str]:
        if self._custom_error_text is not None:
            return self._custom_error_text
        return self._error_text

    @property
    def has_error(self) -> bool:
        return self.error_text is not None

    @property
    def is_valid(self) -> bool:
        return self._custom_error_text is None and self._run_validator() is None

    def _run_validator(self) -> Optional[str]:
        if self._validator is None:
            return None
        return self._validator(self._value)

    def validate(self) -> bool:
        """Clear any forced error, run the validator and publish the result."""
        self._custom_error_text = None
        self._error_text = self._run_validator()
        self.error_changed.emit(self._error_text)
        return self._error_text is None

    def invalidate(self, error_text: str) -> None:
        self._custom_error_text = error_text
        logger.debug(f"[FIELD] '{self._name}' invalidated: {error_text!r}")
        self.error_changed.emit(error_text)

    def _autovalidate(self) -> None:
        mode = self.autovalidate_mode
        if mode is AutovalidateMode.ALWAYS or (
            mode is AutovalidateMode.ON_USER_INTERACTION and self._has_interacted
        ):
            self.validate()

    # ========== RESET / FOCUS ==========

    def reset(self) -> None:
        """Restore the initial value and clear errors and interaction."""
        self._value = self.initial_value
        self._error_text = None
        self._custom_error_text = None
        self._has_interacted = False
        if self._form is not None:
            self._populate_form(notify=False)
        self.value_changed.emit(self._value)
        self.error_changed.emit(None)
        if self._on_reset is not None:
            self._on_reset()

    def request_focus(self) -> None:
        self.focus_requested.emit()
