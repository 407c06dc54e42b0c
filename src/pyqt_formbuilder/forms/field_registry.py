"""Name -> field capability registry with replace-in-place semantics."""

from enum import Enum
import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from pyqt_formbuilder.exceptions import InvalidFieldNameError
from pyqt_formbuilder.protocols.field_protocols import FormField

logger = logging.getLogger(__name__)


class RegistrationResult(Enum):
    """Outcome of FormState.register_field()."""
    INSERTED = "inserted"
    REPLACED = "replaced"


class UnregistrationResult(Enum):
    """Outcome of FormState.unregister_field()."""
    REMOVED = "removed"
    STALE = "stale"      # name is held by a newer field; nothing removed
    UNKNOWN = "unknown"  # name not registered at all


class FieldRegistry:
    """
    At most one field per name.

    Insertion order is traversal order (validation focus, reset, iteration).
    Replacing a field keeps the name at its original position.
    """

    def __init__(self):
        self._fields: Dict[str, FormField] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get(self, name: str) -> Optional[FormField]:
        return self._fields.get(name)

    def items(self):
        """Snapshot of (name, field) pairs; safe against registry mutation while iterating."""
        return list(self._fields.items())

    def first(self) -> Optional[FormField]:
        return next(iter(self._fields.values()), None)

    @property
    def view(self) -> Mapping[str, FormField]:
        return MappingProxyType(self._fields)

    def add(self, name: str, field: FormField) -> Tuple[RegistrationResult, Optional[FormField]]:
        """
        Register field under name.

        Returns:
            (result, previous field or None)

        Raises:
            InvalidFieldNameError: If name is empty
        """
        if not isinstance(name, str) or not name:
            raise InvalidFieldNameError(f"Field name must be a non-empty string, got {name!r}")
        previous = self._fields.get(name)
        self._fields[name] = field
        if previous is None:
            return RegistrationResult.INSERTED, None
        return RegistrationResult.REPLACED, previous

    def remove(self, name: str, field: FormField) -> UnregistrationResult:
        """Remove name only if field is the instance currently on record."""
        current = self._fields.get(name)
        if current is None:
            return UnregistrationResult.UNKNOWN
        if current is not field:
            return UnregistrationResult.STALE
        del self._fields[name]
        return UnregistrationResult.REMOVED

    def clear(self) -> None:
        self._fields.clear()
