"""Configuration for form builders.

Per-form options live in FormBuilderConfig. Process-wide defaults live in
FormBuilderSettings, which applications can replace with set_form_settings().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional


class AutovalidateMode(Enum):
    """When fields validate themselves without an explicit validate() call."""
    DISABLED = "disabled"
    ALWAYS = "always"
    ON_USER_INTERACTION = "on_user_interaction"


@dataclass
class FormBuilderSettings:
    """Process-wide form builder behavior.

    Attributes:
        warn_on_duplicate_names: Log a warning when a field replaces another under the same name
        change_coalesce_delay_ms: Delay before the coalesced form-wide changed signal fires
        default_autovalidate_mode: Mode used by forms that don't set one
    """

    warn_on_duplicate_names: bool = True
    change_coalesce_delay_ms: int = 0
    default_autovalidate_mode: AutovalidateMode = AutovalidateMode.DISABLED


@dataclass
class FormBuilderConfig:
    """
    Configuration for a single FormBuilder / FormState.

    Attributes:
        initial_value: Field name -> initial value. Ignored for fields that set
            their own initial_value.
        enabled: When False all fields are disabled regardless of their own flag
        skip_disabled: Exclude disabled fields from the form's value maps
        autovalidate_mode: None uses FormBuilderSettings.default_autovalidate_mode
        auto_focus_on_validation_failure: Focus the first invalid field after validate()
        on_changed: Called once per notified field value change
        on_will_pop: Dismissal veto. Returning False cancels closing the view.
    """

    initial_value: Dict[str, Any] = field(default_factory=dict)
    enabled: bool = True
    skip_disabled: bool = False
    autovalidate_mode: Optional[AutovalidateMode] = None
    auto_focus_on_validation_failure: bool = False
    on_changed: Optional[Callable[[], None]] = None
    on_will_pop: Optional[Callable[[], bool]] = None

    def resolved_autovalidate_mode(self) -> AutovalidateMode:
        if self.autovalidate_mode is None:
            return get_form_settings().default_autovalidate_mode
        return self.autovalidate_mode


# Global settings instance (set by application)
_form_settings: Optional[FormBuilderSettings] = None


def set_form_settings(settings: Optional[FormBuilderSettings]) -> None:
    """Set the global form builder settings.

    Args:
        settings: FormBuilderSettings instance, or None to restore defaults
    """
    global _form_settings
    _form_settings = settings


def get_form_settings() -> FormBuilderSettings:
    """Get the current form builder settings.

    Returns:
        Current FormBuilderSettings or default if not set
    """
    if _form_settings is None:
        return FormBuilderSettings()
    return _form_settings
