"""Dual (instant / saved) value store backing a FormState."""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class DualValueStore:
    """
    Two name -> raw value maps plus the read-only initial map.

    instant: written on every live edit.
    saved:   written only by commit(), which replaces it with a copy of instant.

    Raw values only; transformers are applied by the FormState on read.
    """

    def __init__(self, initial_value: Optional[Mapping[str, Any]] = None):
        self._initial: Mapping[str, Any] = MappingProxyType(dict(initial_value or {}))
        self._instant: Dict[str, Any] = {}
        self._saved: Dict[str, Any] = {}

    @property
    def initial(self) -> Mapping[str, Any]:
        return self._initial

    @property
    def instant(self) -> Mapping[str, Any]:
        return MappingProxyType(self._instant)

    @property
    def saved(self) -> Mapping[str, Any]:
        return MappingProxyType(self._saved)

    def has_instant(self, name: str) -> bool:
        return name in self._instant

    def set_instant(self, name: str, value: Any) -> None:
        self._instant[name] = value

    def remove_instant(self, name: str) -> bool:
        """Delete the instant entry. Returns False if there was none."""
        if name not in self._instant:
            return False
        del self._instant[name]
        return True

    def get_raw(self, name: str, from_saved: bool = False) -> Any:
        """
        Resolve a raw value through the fallback chain.

        saved (only when from_saved) -> instant -> initial -> None.
        Presence is by key, so an explicit None is a real value.
        """
        if from_saved and name in self._saved:
            return self._saved[name]
        if name in self._instant:
            return self._instant[name]
        return self._initial.get(name)

    def commit(self) -> None:
        """Replace saved with a snapshot of instant."""
        self._saved.clear()
        self._saved.update(self._instant)
        logger.debug(f"[VALUE_STORE] Committed {len(self._saved)} value(s)")

    def clear(self) -> None:
        self._instant.clear()
        self._saved.clear()
