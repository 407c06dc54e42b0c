"""
Context manager factory for boolean flag management.

Pattern:
    Instead of:
        self._in_reset = True
        try:
            # ... logic
        finally:
            self._in_reset = False

    Use:
        with FlagContextManager.manage_flags(self, _in_reset=True):
            # ... logic

Previous values are restored even on exception, so guards nest safely.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class FormFlag(Enum):
    """
    Registry of valid FormState flags.

    Add new flags here as they're introduced to the codebase.
    """
    IN_RESET = '_in_reset'


class FlagContextManager:
    """
    Context manager factory for FormState flags.

    Examples:
        with FlagContextManager.manage_flags(self, _in_reset=True):
            self._reset_fields()

        with FlagContextManager.reset_context(self):
            # ... reset logic
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in FormFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore previous values on exit.

        Args:
            obj: Object to set flags on (typically a FormState)
            **flags: Flag names and values to set (e.g., _in_reset=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to FormFlag enum."
            )

        # No getattr default: every flag must be initialized in __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
            logger.debug(f"Setting flag {flag_name}={flag_value} on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)
                logger.debug(f"Restoring flag {flag_name}={prev_value} on {type(obj).__name__}")

    @staticmethod
    @contextmanager
    def reset_context(obj: Any):
        """Convenience context manager for whole-form reset."""
        with FlagContextManager.manage_flags(obj, **{FormFlag.IN_RESET.value: True}):
            yield

    @staticmethod
    def is_flag_set(obj: Any, flag: FormFlag) -> bool:
        """Check if a flag is currently set to True."""
        return getattr(obj, flag.value)

    @staticmethod
    def get_flag_state(obj: Any) -> Dict[str, bool]:
        """Get current state of all registered flags (for debug logging)."""
        return {flag.value: getattr(obj, flag.value) for flag in FormFlag}
