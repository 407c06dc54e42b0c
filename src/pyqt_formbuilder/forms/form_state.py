"""
Form state coordinator - MODEL layer for a FormBuilder.

Single source of truth for a form's field registry, instant/saved values and
value transformers. Implements save, validate, reset and patch as whole-form
operations over whatever fields are registered at the moment of the call.

Fields push changes in through set_internal_field_value() and pull through
get_raw_value(); nothing else touches the stores.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formbuilder.core import ChangeCoalescer
from pyqt_formbuilder.protocols.field_protocols import FormField
from pyqt_formbuilder.protocols.form_config import (
    AutovalidateMode, FormBuilderConfig, get_form_settings,
)
from pyqt_formbuilder.services import FlagContextManager, FormFlag

from .field_registry import FieldRegistry, RegistrationResult, UnregistrationResult
from .transformer_registry import TransformerRegistry
from .value_store import DualValueStore

logger = logging.getLogger(__name__)

# Verbose tracing of registry transitions
DEBUG_FORM_STATE = False


class FormState(QObject):
    """
    Runtime engine of one form.

    Lifetime is scoped to the owning FormBuilder; dispose() clears every
    registry and store.

    Signals:
        changed: Coalesced form-wide change notification (one per event loop turn)
        field_value_changed(name, raw_value): Every notified instant value write
        enabled_changed(bool): Form-wide enabled flag toggled
        validated(bool): Result of each validate() pass
        form_saved: After save() committed the instant values
        form_reset: After reset() finished all fields
        form_disposed: dispose() is about to clear the form; fields detach
    """

    changed = pyqtSignal()
    field_value_changed = pyqtSignal(str, object)
    enabled_changed = pyqtSignal(bool)
    validated = pyqtSignal(bool)
    form_saved = pyqtSignal()
    form_reset = pyqtSignal()
    form_disposed = pyqtSignal()

    def __init__(self, config: Optional[FormBuilderConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._config = config or FormBuilderConfig()
        self._enabled = self._config.enabled
        self._fields = FieldRegistry()
        self._transformers = TransformerRegistry()
        self._store = DualValueStore(self._config.initial_value)
        self._coalescer = ChangeCoalescer(
            delay_ms=get_form_settings().change_coalesce_delay_ms,
            handler=self.changed.emit,
        )

        # Managed by FlagContextManager
        self._in_reset = False
        # on_changed is deferred to the end of reset()
        self._change_pending_after_reset = False

    # ========== CONFIGURATION ==========

    @property
    def config(self) -> FormBuilderConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Toggle the form-wide enabled flag. Fields combine it with their own."""
        if enabled == self._enabled:
            return
        self._enabled = enabled
        logger.debug(f"[FORM_STATE] enabled={enabled}")
        self.enabled_changed.emit(enabled)

    @property
    def skip_disabled(self) -> bool:
        return self._config.skip_disabled

    @property
    def autovalidate_mode(self) -> AutovalidateMode:
        return self._config.resolved_autovalidate_mode()

    @property
    def in_reset(self) -> bool:
        return FlagContextManager.is_flag_set(self, FormFlag.IN_RESET)

    # ========== VALUE ACCESS ==========

    @property
    def fields(self) -> Mapping[str, FormField]:
        return self._fields.view

    @property
    def initial_value(self) -> Mapping[str, Any]:
        return self._store.initial

    @property
    def instant_value(self) -> Mapping[str, Any]:
        """Immutable snapshot of live values, transformed."""
        return MappingProxyType(self._transformers.transform_all(dict(self._store.instant)))

    @property
    def value(self) -> Mapping[str, Any]:
        """Immutable snapshot of the values committed by the last save(), transformed."""
        return MappingProxyType(self._transformers.transform_all(dict(self._store.saved)))

    def transform_value(self, name: str, value: Any) -> Any:
        return self._transformers.transform(name, value)

    def get_raw_value(self, name: str, from_saved: bool = False) -> Any:
        """
        Raw (untransformed) value for name.

        Precedence: saved (if from_saved and present) -> instant -> initial -> None.
        """
        return self._store.get_raw(name, from_saved=from_saved)

    def get_transformed_value(self, name: str, from_saved: bool = False) -> Any:
        return self.transform_value(name, self.get_raw_value(name, from_saved=from_saved))

    def set_internal_field_value(self, name: str, value: Any, notify: bool = True) -> None:
        """
        Write the instant value for name.

        Args:
            name: Field name
            value: Raw value
            notify: Schedule the coalesced changed signal and call on_changed
        """
        self._store.set_instant(name, value)
        if DEBUG_FORM_STATE:
            logger.info(f"[FORM_STATE] instant[{name}] = {repr(value)[:50]} (notify={notify})")
        if notify:
            self.field_value_changed.emit(name, value)
            self._notify_changed()

    def remove_internal_field_value(self, name: str, notify: bool = True) -> None:
        """
        Drop name from the instant values entirely.

        Distinct from writing None: the field stops contributing to the map.
        """
        removed = self._store.remove_instant(name)
        if DEBUG_FORM_STATE:
            logger.info(f"[FORM_STATE] removed instant[{name}] (present={removed}, notify={notify})")
        if notify:
            self._coalescer.trigger()

    def _notify_changed(self) -> None:
        self._coalescer.trigger()
        if self._in_reset:
            self._change_pending_after_reset = True
            return
        if self._config.on_changed is not None:
            self._config.on_changed()

    def flush_changes(self) -> None:
        """Emit a pending coalesced changed signal now."""
        self._coalescer.force()

    # ========== REGISTRATION ==========

    def register_field(self, name: str, field: FormField) -> RegistrationResult:
        """
        Attach field under name.

        A new name is populated from the instant value if one exists, else
        from the field's initial value. A name that is already registered is
        replaced in place and the new field inherits the previous field's
        current value, so in-flight edits survive a widget rebuild.

        Raises:
            InvalidFieldNameError: If name is empty
        """
        result, previous = self._fields.add(name, field)

        if result is RegistrationResult.REPLACED and get_form_settings().warn_on_duplicate_names:
            logger.warning(
                f"[FORM_STATE] Replacing duplicate field for '{name}' "
                f"-- this is OK to ignore as long as the field was intentionally replaced"
            )

        field.register_transformer(self._transformers)

        if previous is not None:
            field.set_value(previous.value, populate_form=False)
        else:
            if self._store.has_instant(name):
                value = self._store.instant[name]
            else:
                value = field.initial_value
                self._store.set_instant(name, value)
            field.set_value(value, populate_form=False)

        if DEBUG_FORM_STATE:
            logger.info(f"[FORM_STATE] register '{name}' -> {result.value} ({len(self._fields)} field(s))")
        return result

    def unregister_field(self, name: str, field: FormField) -> UnregistrationResult:
        """
        Detach field from name if it is still the registered instance.

        Values are left in place: a detached field's last instant and saved
        values remain until remove_internal_field_value() is called.
        """
        result = self._fields.remove(name, field)
        if result is UnregistrationResult.REMOVED:
            self._transformers.pop(name, None)
        elif result is UnregistrationResult.STALE:
            logger.warning(
                f"[FORM_STATE] Ignoring field unregistration for '{name}' "
                f"-- this is OK to ignore as long as the field was intentionally replaced"
            )
        else:
            logger.warning(f"[FORM_STATE] Unregistration for unknown field '{name}' ignored")

        if DEBUG_FORM_STATE:
            logger.info(f"[FORM_STATE] unregister '{name}' -> {result.value}")
        return result

    # ========== SAVE / VALIDATE ==========

    def save(self) -> None:
        """Flush every field's buffered edit, then commit instant values to saved."""
        for name, field in self._fields.items():
            field.save()
        self._store.commit()
        logger.debug(f"[FORM_STATE] Saved {len(self._store.saved)} value(s)")
        self.form_saved.emit()

    @property
    def is_valid(self) -> bool:
        """
        True if every registered field is valid. An empty form is valid.

        A field whose validity check raises is logged and counted as invalid.
        """
        for name, field in self._fields.items():
            try:
                if not field.is_valid:
                    return False
            except Exception as e:
                logger.error(f"[FORM_STATE] Error checking validity of field '{name}': {e}", exc_info=True)
                return False
        return True

    def validate(self, focus_on_invalid: bool = True) -> bool:
        """
        Validate every registered field.

        A field whose validator raises is logged and counted as invalid; the
        remaining fields are still validated.

        Args:
            focus_on_invalid: Allow auto-focus when the form option is enabled

        Returns:
            True if no field has an error
        """
        failed = []
        for name, field in self._fields.items():
            try:
                valid = field.validate()
            except Exception as e:
                logger.error(f"[FORM_STATE] Error validating field '{name}': {e}", exc_info=True)
                valid = False
            if not valid:
                failed.append((name, field))

        is_valid = not failed
        if not is_valid:
            logger.debug(f"[FORM_STATE] Validation failed for {[name for name, _ in failed]}")
            if focus_on_invalid and self._config.auto_focus_on_validation_failure:
                self._focus_first_error(failed)

        self.validated.emit(is_valid)
        return is_valid

    def _focus_first_error(self, failed) -> None:
        # Exactly one field is focused: the first in traversal order with its error flag set
        for name, field in self._fields.items():
            if field.has_error:
                logger.debug(f"[FORM_STATE] Focusing first invalid field '{name}'")
                field.request_focus()
                return
        name, field = failed[0]
        logger.debug(f"[FORM_STATE] No field reports an error; focusing '{name}'")
        field.request_focus()

    def save_and_validate(self) -> bool:
        """save() then validate(); validators observe the committed values."""
        self.save()
        return self.validate()

    def invalidate_field(self, name: str, error_text: str = "") -> None:
        """Force the named field invalid. Unknown names are ignored."""
        field = self._fields.get(name)
        if field is None:
            logger.debug(f"[FORM_STATE] invalidate_field: no field '{name}'")
            return
        field.invalidate(error_text)

    def invalidate_first_field(self, error_text: str) -> None:
        field = self._fields.first()
        if field is None:
            logger.debug("[FORM_STATE] invalidate_first_field: form has no fields")
            return
        field.invalidate(error_text)

    # ========== RESET / PATCH ==========

    def reset(self) -> None:
        """
        Reset every field to its initial value.

        Each field is reset independently: a failure is logged with the
        field's name and the remaining fields are still reset. on_changed is
        called at most once for the whole reset.
        """
        logger.debug("[FORM_STATE] reset called")
        self._change_pending_after_reset = False
        with FlagContextManager.reset_context(self):
            for name, field in self._fields.items():
                try:
                    field.reset()
                    field.did_change(self.get_raw_value(name))
                except Exception:
                    logger.exception(f"[FORM_STATE] Error when resetting field: {name}")

        if self._change_pending_after_reset:
            self._change_pending_after_reset = False
            if self._config.on_changed is not None:
                self._config.on_changed()
        self.form_reset.emit()

    def patch_value(self, values: Mapping[str, Any]) -> None:
        """Push values into the registered fields named in values; other names are ignored."""
        for name, value in values.items():
            field = self._fields.get(name)
            if field is not None:
                field.did_change(value)
            elif DEBUG_FORM_STATE:
                logger.info(f"[FORM_STATE] patch_value: skipping unregistered '{name}'")

    # ========== DISMISSAL / TEARDOWN ==========

    def will_pop(self) -> bool:
        """Consult the dismissal veto. True means the view may close."""
        if self._config.on_will_pop is None:
            return True
        allowed = bool(self._config.on_will_pop())
        logger.debug(f"[FORM_STATE] will_pop -> {allowed}")
        return allowed

    def dispose(self) -> None:
        """Detach every field, then clear the registry, both value stores and all transformers."""
        self._coalescer.cancel()
        self.form_disposed.emit()
        self._fields.clear()
        self._transformers.clear()
        self._store.clear()
        logger.debug("[FORM_STATE] Disposed")

    def debug_snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the whole state for logging."""
        return {
            "fields": list(self._fields),
            "instant": dict(self._store.instant),
            "saved": dict(self._store.saved),
            "initial": dict(self._store.initial),
            "transformers": list(self._transformers),
            "flags": FlagContextManager.get_flag_state(self),
        }
