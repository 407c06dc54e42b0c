"""
pyqt-formbuilder: form state coordination for PyQt6.

Aggregates a dynamically changing set of input fields into one form that
tracks live and committed values, applies per-field value transformers and
runs validate/save/reset/patch across every registered field.

Architecture:
- Tier 1 (Core): Pure PyQt6 utilities (change coalescing)
- Tier 2 (Protocols): Field and widget ABCs, input adapters, configuration
- Tier 3 (Services): Flag guards, signal blocking, dismissal veto
- Tier 4 (Forms): FormState coordinator, FormBuilder container, field widgets

Key Features:
- Replace-in-place field registration that survives widget rebuilds
- Instant vs saved value maps with read-time transformers
- Per-field failure isolation in reset and validate
- Explicit dependency injection of the form into its fields
"""

__version__ = "0.1.0"

from pyqt_formbuilder.exceptions import FormBuilderError, InvalidFieldNameError, MissingFormError
from pyqt_formbuilder.protocols import (
    AutovalidateMode,
    FieldOption,
    FormBuilderConfig,
    FormBuilderSettings,
    FormField,
    get_form_settings,
    set_form_settings,
)
from pyqt_formbuilder.forms.form_state import FormState
from pyqt_formbuilder.forms.form_builder import FormBuilder
from pyqt_formbuilder.forms.field_state import FieldState
from pyqt_formbuilder.forms.field_registry import RegistrationResult, UnregistrationResult

__all__ = [
    "__version__",
    "FormBuilderError",
    "InvalidFieldNameError",
    "MissingFormError",
    "AutovalidateMode",
    "FieldOption",
    "FormBuilderConfig",
    "FormBuilderSettings",
    "FormField",
    "get_form_settings",
    "set_form_settings",
    "FormState",
    "FormBuilder",
    "FieldState",
    "RegistrationResult",
    "UnregistrationResult",
]
