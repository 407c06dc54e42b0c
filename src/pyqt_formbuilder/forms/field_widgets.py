"""
Field widgets: a FieldState bound to a Qt input adapter.

Each concrete field only chooses and configures its adapter; value flow,
error display, focus and enablement are handled by FormFieldWidget.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from pyqt_formbuilder.protocols.field_option import FieldOption
from pyqt_formbuilder.protocols.form_config import AutovalidateMode
from pyqt_formbuilder.protocols.widget_adapters import (
    CheckBoxAdapter, ChipGroupAdapter, ComboBoxAdapter, DoubleSpinBoxAdapter,
    LineEditAdapter, SpinBoxAdapter,
)
from pyqt_formbuilder.protocols.widget_protocols import WidgetValueAccess
from pyqt_formbuilder.services import SignalService

from .field_registry import RegistrationResult
from .field_state import FieldState, Validator
from .form_state import FormState

logger = logging.getLogger(__name__)


class FormFieldWidget(QWidget):
    """
    Base widget for form fields: optional label, input adapter, error label.

    Subclasses implement _create_adapter(). Widget-specific keyword arguments
    (options, placeholder, range...) are forwarded to it.

    The field registers with form on construction when attach=True and
    unregisters when the widget is destroyed or detach() is called.
    """

    def __init__(
        self,
        name: str,
        form: Optional[FormState] = None,
        *,
        label: Optional[str] = None,
        initial_value: Any = None,
        validator: Optional[Validator] = None,
        value_transformer: Optional[Callable[[Any], Any]] = None,
        on_changed: Optional[Callable[[Any], None]] = None,
        on_saved: Optional[Callable[[Any], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
        enabled: bool = True,
        autovalidate_mode: Optional[AutovalidateMode] = None,
        attach: bool = True,
        parent: Optional[QWidget] = None,
        **widget_options,
    ):
        super().__init__(parent)
        # Not parented to the widget: must outlive its C++ children so detach() can run on destroy
        self._state = FieldState(
            name,
            form,
            initial_value=initial_value,
            validator=validator,
            value_transformer=value_transformer,
            on_changed=on_changed,
            on_saved=on_saved,
            on_reset=on_reset,
            enabled=enabled,
            autovalidate_mode=autovalidate_mode,
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._label = QLabel(label, self) if label else None
        if self._label is not None:
            layout.addWidget(self._label)

        self._adapter = self._create_adapter(**widget_options)
        layout.addWidget(self._adapter)
        if self._label is not None:
            self._label.setBuddy(self._adapter)

        self._error_label = QLabel(self)
        self._error_label.setObjectName("field_error")
        self._error_label.setVisible(False)
        layout.addWidget(self._error_label)

        self._connect_signals()
        self._adapter.setEnabled(self._state.effective_enabled)

        self.registration_result: Optional[RegistrationResult] = None
        if attach and form is not None:
            self.registration_result = self._state.attach()
        state = self._state
        self.destroyed.connect(lambda *_: state.detach())

    def _create_adapter(self, **widget_options) -> WidgetValueAccess:
        raise NotImplementedError(f"{type(self).__name__} must implement _create_adapter()")

    def _connect_signals(self) -> None:
        self._adapter.connect_change_signal(self._on_adapter_changed)
        self._state.value_changed.connect(self._on_state_value_changed)
        self._state.error_changed.connect(self._on_error_changed)
        self._state.focus_requested.connect(self._adapter.setFocus)
        self._state.enabled_changed.connect(self._adapter.setEnabled)

    # ========== ACCESSORS ==========

    @property
    def name(self) -> str:
        return self._state.name

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def adapter(self) -> WidgetValueAccess:
        return self._adapter

    @property
    def error_label(self) -> QLabel:
        return self._error_label

    def attach(self) -> RegistrationResult:
        self.registration_result = self._state.attach()
        return self.registration_result

    def detach(self):
        return self._state.detach()

    # ========== SIGNAL HANDLERS ==========

    def _on_adapter_changed(self, value: Any) -> None:
        logger.debug(f"[FIELD_WIDGET] '{self.name}' edited -> {repr(value)[:50]}")
        self._state.did_change(value)

    def _on_state_value_changed(self, value: Any) -> None:
        if self._adapter.get_value() == value:
            return
        # Mirror into the adapter without echoing a change back into the form
        with SignalService.block_signals(self._adapter):
            self._adapter.set_value(value)

    def _on_error_changed(self, error_text: Optional[str]) -> None:
        self._error_label.setText(error_text or "")
        self._error_label.setVisible(error_text is not None)


class FormBuilderTextField(FormFieldWidget):
    """Single-line text field. Empty text is None."""

    def _create_adapter(self, placeholder: str = "", **_) -> LineEditAdapter:
        adapter = LineEditAdapter(self)
        if placeholder:
            adapter.set_placeholder(placeholder)
        return adapter


class FormBuilderSpinBox(FormFieldWidget):
    """
    Integer field.

    With allow_none the minimum value is reserved for None (shown as the
    placeholder text), so pass minimum one below the lowest real value.
    """

    def _create_adapter(self, minimum: Optional[int] = None, maximum: Optional[int] = None,
                        placeholder: str = "", allow_none: bool = True, **_) -> SpinBoxAdapter:
        adapter = SpinBoxAdapter(self)
        if not allow_none:
            adapter.setSpecialValueText("")
        if minimum is not None or maximum is not None:
            adapter.configure_range(
                minimum if minimum is not None else adapter.minimum(),
                maximum if maximum is not None else adapter.maximum(),
            )
        if placeholder:
            adapter.set_placeholder(placeholder)
        return adapter


class FormBuilderDoubleSpinBox(FormFieldWidget):
    """Floating point field."""

    def _create_adapter(self, minimum: Optional[float] = None, maximum: Optional[float] = None,
                        decimals: Optional[int] = None, allow_none: bool = True,
                        **_) -> DoubleSpinBoxAdapter:
        adapter = DoubleSpinBoxAdapter(self)
        if not allow_none:
            adapter.setSpecialValueText("")
        if minimum is not None or maximum is not None:
            adapter.configure_range(
                minimum if minimum is not None else adapter.minimum(),
                maximum if maximum is not None else adapter.maximum(),
            )
        if decimals is not None:
            adapter.setDecimals(decimals)
        return adapter


class FormBuilderDropdown(FormFieldWidget):
    """Select one value from a list of FieldOption."""

    def _create_adapter(self, options: Sequence[FieldOption] = (), placeholder: str = "",
                        **_) -> ComboBoxAdapter:
        adapter = ComboBoxAdapter(self)
        adapter.set_options(list(options))
        if placeholder:
            adapter.set_placeholder(placeholder)
        return adapter


class FormBuilderCheckbox(FormFieldWidget):
    """Boolean field."""

    def _create_adapter(self, text: str = "", **_) -> CheckBoxAdapter:
        adapter = CheckBoxAdapter(self)
        adapter.setText(text)
        return adapter


class FormBuilderChoiceChip(FormFieldWidget):
    """Single-select chips. Value is the selected option's value or None."""

    def _create_adapter(self, options: Sequence[FieldOption] = (), **_) -> ChipGroupAdapter:
        adapter = ChipGroupAdapter(self, multi_select=False)
        adapter.set_options(list(options))
        return adapter


class FormBuilderFilterChip(FormFieldWidget):
    """Multi-select chips. Value is the list of selected option values."""

    def _create_adapter(self, options: Sequence[FieldOption] = (), **_) -> ChipGroupAdapter:
        adapter = ChipGroupAdapter(self, multi_select=True)
        adapter.set_options(list(options))
        return adapter

    @property
    def selected(self) -> List[Any]:
        return list(self.state.value or [])
