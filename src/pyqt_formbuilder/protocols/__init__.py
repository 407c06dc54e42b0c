"""
Field and widget protocol definitions, adapters and configuration.

ABC-based contracts that eliminate duck typing in favor of explicit,
fail-loud inheritance-based architecture.
"""

from .field_protocols import (
    ValueGettable,
    ValueSettable,
    Validatable,
    Resettable,
    Focusable,
    Savable,
    TransformerProvider,
    FormField,
)
from .widget_protocols import (
    WidgetValueAccess,
    PlaceholderCapable,
    OptionsConfigurable,
    ChangeSignalEmitter,
)
from .widget_adapters import (
    LineEditAdapter,
    SpinBoxAdapter,
    DoubleSpinBoxAdapter,
    ComboBoxAdapter,
    CheckBoxAdapter,
    ChipGroupAdapter,
    PyQtWidgetMeta,
)
from .field_option import FieldOption
from .form_config import (
    AutovalidateMode,
    FormBuilderConfig,
    FormBuilderSettings,
    set_form_settings,
    get_form_settings,
)

__all__ = [
    "ValueGettable",
    "ValueSettable",
    "Validatable",
    "Resettable",
    "Focusable",
    "Savable",
    "TransformerProvider",
    "FormField",
    "WidgetValueAccess",
    "PlaceholderCapable",
    "OptionsConfigurable",
    "ChangeSignalEmitter",
    "LineEditAdapter",
    "SpinBoxAdapter",
    "DoubleSpinBoxAdapter",
    "ComboBoxAdapter",
    "CheckBoxAdapter",
    "ChipGroupAdapter",
    "PyQtWidgetMeta",
    "FieldOption",
    "AutovalidateMode",
    "FormBuilderConfig",
    "FormBuilderSettings",
    "set_form_settings",
    "get_form_settings",
]
