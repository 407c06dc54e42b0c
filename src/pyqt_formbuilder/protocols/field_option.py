"""Selectable option for dropdown and chip fields."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FieldOption:
    """
    One selectable entry.

    All options of a given field should carry values of a consistent type.
    The label defaults to str(value).
    """
    value: Any
    label: Optional[str] = None

    @property
    def display_text(self) -> str:
        return self.label if self.label is not None else str(self.value)
