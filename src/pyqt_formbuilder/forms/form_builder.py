"""PyQt form container - VIEW layer owning a FormState."""

import logging
from typing import Any, Mapping, Optional, Type

from PyQt6.QtWidgets import QVBoxLayout, QWidget

from pyqt_formbuilder.protocols.field_protocols import FormField
from pyqt_formbuilder.protocols.form_config import FormBuilderConfig
from pyqt_formbuilder.services import DismissGuard

from .form_state import FormState

logger = logging.getLogger(__name__)


class FormBuilder(QWidget):
    """
    Container for form fields.

    Wires a FormBuilderConfig into its FormState and lays out field widgets.
    Fields receive the FormState explicitly (form_builder.form_state, or via
    create_field()), there is no parent-chain lookup.

    Example:
        form = FormBuilder(FormBuilderConfig(initial_value={"age": 30}))
        form.create_field(FormBuilderTextField, "email", validator=required)
        form.create_field(FormBuilderSpinBox, "age")
        if form.save_and_validate():
            submit(form.value)
    """

    def __init__(self, config: Optional[FormBuilderConfig] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._config = config or FormBuilderConfig()
        self._form_state = FormState(self._config, parent=self)
        self._dismiss_guard: Optional[DismissGuard] = None

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)

    @property
    def config(self) -> FormBuilderConfig:
        return self._config

    @property
    def form_state(self) -> FormState:
        return self._form_state

    # ========== FIELD LAYOUT ==========

    def add_field(self, widget: QWidget) -> None:
        """Append a field widget to the form's layout."""
        self._layout.addWidget(widget)

    def create_field(self, field_class: Type[QWidget], name: str, **kwargs) -> QWidget:
        """Construct a field widget bound to this form's state and lay it out."""
        widget = field_class(name, self._form_state, parent=self, **kwargs)
        self.add_field(widget)
        return widget

    # ========== DELEGATION TO FORM STATE ==========

    @property
    def fields(self) -> Mapping[str, FormField]:
        return self._form_state.fields

    @property
    def value(self) -> Mapping[str, Any]:
        return self._form_state.value

    @property
    def instant_value(self) -> Mapping[str, Any]:
        return self._form_state.instant_value

    @property
    def initial_value(self) -> Mapping[str, Any]:
        return self._form_state.initial_value

    @property
    def is_valid(self) -> bool:
        return self._form_state.is_valid

    @property
    def enabled(self) -> bool:
        return self._form_state.enabled

    def set_enabled(self, enabled: bool) -> None:
        self._form_state.set_enabled(enabled)

    def save(self) -> None:
        self._form_state.save()

    def validate(self) -> bool:
        return self._form_state.validate()

    def save_and_validate(self) -> bool:
        return self._form_state.save_and_validate()

    def reset(self) -> None:
        self._form_state.reset()

    def patch_value(self, values: Mapping[str, Any]) -> None:
        self._form_state.patch_value(values)

    def invalidate_field(self, name: str, error_text: str = "") -> None:
        self._form_state.invalidate_field(name, error_text)

    def invalidate_first_field(self, error_text: str) -> None:
        self._form_state.invalidate_first_field(error_text)

    # ========== DISMISSAL ==========

    def will_pop(self) -> bool:
        return self._form_state.will_pop()

    def install_dismiss_guard(self, window: Optional[QWidget] = None) -> DismissGuard:
        """
        Veto closing of window (default: this widget's top-level window)
        whenever the config's on_will_pop returns False.
        """
        if self._dismiss_guard is not None:
            self._dismiss_guard.remove()
        target = window if window is not None else self.window()
        self._dismiss_guard = DismissGuard(target, self.will_pop)
        return self._dismiss_guard

    # ========== TEARDOWN ==========

    def dispose(self) -> None:
        """Tear down the form: clear the FormState and drop the dismissal veto."""
        if self._dismiss_guard is not None:
            self._dismiss_guard.remove()
            self._dismiss_guard = None
        self._form_state.dispose()
        logger.debug("[FORM_BUILDER] Disposed")
