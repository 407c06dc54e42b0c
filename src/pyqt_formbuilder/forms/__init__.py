"""
Form state coordination and form widgets.

FormState (model) and FormBuilder (container view), plus the per-field
state and the stock field widgets.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_state import FormState
    from .form_builder import FormBuilder
    from .field_state import FieldState
    from .field_registry import FieldRegistry, RegistrationResult, UnregistrationResult
    from .transformer_registry import TransformerRegistry
    from .value_store import DualValueStore

_EXPORTS = {
    "FormState": ("pyqt_formbuilder.forms.form_state", "FormState"),
    "FormBuilder": ("pyqt_formbuilder.forms.form_builder", "FormBuilder"),
    "FieldState": ("pyqt_formbuilder.forms.field_state", "FieldState"),
    "FieldRegistry": ("pyqt_formbuilder.forms.field_registry", "FieldRegistry"),
    "RegistrationResult": ("pyqt_formbuilder.forms.field_registry", "RegistrationResult"),
    "UnregistrationResult": ("pyqt_formbuilder.forms.field_registry", "UnregistrationResult"),
    "TransformerRegistry": ("pyqt_formbuilder.forms.transformer_registry", "TransformerRegistry"),
    "DualValueStore": ("pyqt_formbuilder.forms.value_store", "DualValueStore"),
    "FormFieldWidget": ("pyqt_formbuilder.forms.field_widgets", "FormFieldWidget"),
    "FormBuilderTextField": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderTextField"),
    "FormBuilderSpinBox": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderSpinBox"),
    "FormBuilderDoubleSpinBox": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderDoubleSpinBox"),
    "FormBuilderDropdown": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderDropdown"),
    "FormBuilderCheckbox": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderCheckbox"),
    "FormBuilderChoiceChip": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderChoiceChip"),
    "FormBuilderFilterChip": ("pyqt_formbuilder.forms.field_widgets", "FormBuilderFilterChip"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
