"""
Widget adapters that wrap Qt input widgets to implement the input ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QSpinBox.value() vs QComboBox.currentData()
- QLineEdit.setText() vs QSpinBox.setValue() vs QComboBox.setCurrentIndex()
- textChanged vs valueChanged vs currentIndexChanged

All adapters implement a consistent interface:
- get_value() / set_value() for all widgets
- connect_change_signal() / disconnect_change_signal() for all widgets
"""

from abc import ABCMeta
from typing import Any, Callable, Dict, List

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox, QComboBox, QDoubleSpinBox, QHBoxLayout, QLineEdit,
    QPushButton, QSpinBox, QWidget,
)

from .field_option import FieldOption
from .widget_protocols import (
    ChangeSignalEmitter, OptionsConfigurable, PlaceholderCapable, WidgetValueAccess,
)


# Qt's metaclass must be combined with ABCMeta for ABC-derived QObjects
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt classes that need ABC support."""
    pass


class _ChangeSignalBridge(ChangeSignalEmitter):
    """
    Shared connect/disconnect bookkeeping.

    Qt can only disconnect the exact slot object it connected, so the wrapping
    slot is remembered per callback.
    """

    def _change_signal(self):
        raise NotImplementedError(f"{type(self).__name__} must define _change_signal()")

    def _slots(self) -> Dict[Callable[[Any], None], Callable[..., None]]:
        slots = self.__dict__.get("_change_slots")
        if slots is None:
            slots = {}
            self.__dict__["_change_slots"] = slots
        return slots

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        slot = lambda *_args: callback(self.get_value())
        self._slots()[callback] = slot
        self._change_signal().connect(slot)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Implement ChangeSignalEmitter ABC."""
        slot = self._slots().pop(callback, None)
        if slot is None:
            return
        try:
            self._change_signal().disconnect(slot)
        except TypeError:
            # Signal not connected - ignore
            pass


class LineEditAdapter(QLineEdit, WidgetValueAccess, PlaceholderCapable,
                      _ChangeSignalBridge, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit.

    Empty (or whitespace-only) text reads as None.
    """

    def get_value(self) -> Any:
        text = self.text().strip()
        return None if text == "" else text

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def _change_signal(self):
        return self.textChanged


class SpinBoxAdapter(QSpinBox, WidgetValueAccess, PlaceholderCapable,
                     _ChangeSignalBridge, metaclass=PyQtWidgetMeta):
    """
    Adapter for QSpinBox.

    Handles None values using the special value text mechanism: the minimum
    value with special text set reads as None.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSpecialValueText(" ")  # Empty special value = None
        self.setRange(-2147483648, 2147483647)

    def get_value(self) -> Any:
        if self.value() == self.minimum() and self.specialValueText():
            return None
        return self.value()

    def set_value(self, value: Any) -> None:
        if value is None:
            self.setValue(self.minimum())
        else:
            self.setValue(int(value))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def configure_range(self, minimum: float, maximum: float) -> None:
        self.setRange(int(minimum), int(maximum))

    def _change_signal(self):
        return self.valueChanged


class DoubleSpinBoxAdapter(QDoubleSpinBox, WidgetValueAccess, PlaceholderCapable,
                           _ChangeSignalBridge, metaclass=PyQtWidgetMeta):
    """Adapter for QDoubleSpinBox. None handling as for SpinBoxAdapter."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSpecialValueText(" ")
        self.setRange(-1e308, 1e308)
        self.setDecimals(6)

    def get_value(self) -> Any:
        if self.value() == self.minimum() and self.specialValueText():
            return None
        return self.value()

    def set_value(self, value: Any) -> None:
        if value is None:
            self.setValue(self.minimum())
        else:
            self.setValue(float(value))

    def set_placeholder(self, text: str) -> None:
        self.setSpecialValueText(text)

    def configure_range(self, minimum: float, maximum: float) -> None:
        self.setRange(minimum, maximum)

    def _change_signal(self):
        return self.valueChanged


class ComboBoxAdapter(QComboBox, WidgetValueAccess, PlaceholderCapable,
                      OptionsConfigurable, _ChangeSignalBridge, metaclass=PyQtWidgetMeta):
    """
    Adapter for QComboBox.

    Stores option values in itemData, not just display text. No selection
    reads as None.
    """

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        for i in range(self.count()):
            if self.itemData(i) == value:
                self.setCurrentIndex(i)
                return
        # Value not found - clear selection
        self.setCurrentIndex(-1)

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def set_options(self, options: List[FieldOption]) -> None:
        self.clear()
        for option in options:
            self.addItem(option.display_text, option.value)
        self.setCurrentIndex(-1)

    def _change_signal(self):
        return self.currentIndexChanged


class CheckBoxAdapter(QCheckBox, WidgetValueAccess, _ChangeSignalBridge,
                      metaclass=PyQtWidgetMeta):
    """
    Adapter for QCheckBox.

    Returns bool values, treats None as False.
    """

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value) if value is not None else False)

    def _change_signal(self):
        return self.stateChanged


class ChipGroupAdapter(QWidget, WidgetValueAccess, OptionsConfigurable,
                       _ChangeSignalBridge, metaclass=PyQtWidgetMeta):
    """
    Row of checkable chip buttons, one per FieldOption.

    Single-select mode returns the selected option value or None; clicking the
    selected chip again clears the selection. Multi-select mode returns the
    list of selected values in option order (empty list when none).

    Only user clicks emit selection_changed; set_value() is silent.
    """

    selection_changed = pyqtSignal()

    def __init__(self, parent=None, multi_select: bool = False):
        super().__init__(parent)
        self._multi_select = multi_select
        self._chips: Dict[Any, QPushButton] = {}
        self._options: List[FieldOption] = []
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

    @property
    def multi_select(self) -> bool:
        return self._multi_select

    def chip_for(self, value: Any) -> QPushButton:
        """Return the chip button for an option value (KeyError if absent)."""
        return self._chips[value]

    def set_options(self, options: List[FieldOption]) -> None:
        layout = self.layout()
        while layout.count():
            item = layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self._chips = {}
        self._options = list(options)
        for option in self._options:
            chip = QPushButton(option.display_text, self)
            chip.setCheckable(True)
            chip.clicked.connect(lambda checked, v=option.value: self._on_chip_clicked(v, checked))
            layout.addWidget(chip)
            self._chips[option.value] = chip
        layout.addStretch()

    def _on_chip_clicked(self, value: Any, checked: bool) -> None:
        if not self._multi_select and checked:
            for other_value, chip in self._chips.items():
                if other_value != value:
                    chip.setChecked(False)
        self.selection_changed.emit()

    def get_value(self) -> Any:
        selected = [o.value for o in self._options if self._chips[o.value].isChecked()]
        if self._multi_select:
            return selected
        return selected[0] if selected else None

    def set_value(self, value: Any) -> None:
        if self._multi_select:
            wanted = list(value) if value is not None else []
            for option_value, chip in self._chips.items():
                chip.setChecked(option_value in wanted)
        else:
            for option_value, chip in self._chips.items():
                chip.setChecked(value is not None and option_value == value)

    def _change_signal(self):
        return self.selection_changed
