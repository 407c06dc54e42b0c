"""Tests for field/widget protocols, adapters and configuration."""

import pytest


def test_line_edit_adapter(qapp):
    """Test LineEditAdapter implements protocols."""
    from pyqt_formbuilder.protocols import LineEditAdapter, WidgetValueAccess, ChangeSignalEmitter

    adapter = LineEditAdapter()
    assert isinstance(adapter, WidgetValueAccess)
    assert isinstance(adapter, ChangeSignalEmitter)

    adapter.set_value("test")
    assert adapter.get_value() == "test"

    adapter.set_value(None)
    assert adapter.text() == ""
    assert adapter.get_value() is None


def test_spin_box_adapter_none_at_minimum(qapp):
    from pyqt_formbuilder.protocols import SpinBoxAdapter

    adapter = SpinBoxAdapter()
    adapter.set_value(7)
    assert adapter.get_value() == 7
    adapter.set_value(None)
    assert adapter.get_value() is None


def test_combo_box_adapter_options(qapp):
    from pyqt_formbuilder.protocols import ComboBoxAdapter, FieldOption

    adapter = ComboBoxAdapter()
    adapter.set_options([FieldOption("a", "Alpha"), FieldOption("b")])
    assert adapter.get_value() is None
    assert adapter.itemText(0) == "Alpha"
    assert adapter.itemText(1) == "b"

    adapter.set_value("b")
    assert adapter.get_value() == "b"

    adapter.set_value("missing")
    assert adapter.get_value() is None


def test_change_signal_connect_and_disconnect(qapp):
    from pyqt_formbuilder.protocols import LineEditAdapter

    adapter = LineEditAdapter()
    received = []
    adapter.connect_change_signal(received.append)

    adapter.setText("one")
    assert received == ["one"]

    adapter.disconnect_change_signal(received.append)
    adapter.setText("two")
    assert received == ["one"]

    # Disconnecting twice is harmless
    adapter.disconnect_change_signal(received.append)


def test_chip_group_single_select(qapp):
    from pyqt_formbuilder.protocols import ChipGroupAdapter, FieldOption

    adapter = ChipGroupAdapter(multi_select=False)
    adapter.set_options([FieldOption(1), FieldOption(2), FieldOption(3)])
    received = []
    adapter.connect_change_signal(received.append)

    adapter.chip_for(1).click()
    adapter.chip_for(3).click()
    assert adapter.get_value() == 3
    assert not adapter.chip_for(1).isChecked()
    assert received == [1, 3]

    # Clicking the selected chip clears the selection
    adapter.chip_for(3).click()
    assert adapter.get_value() is None


def test_chip_group_multi_select(qapp):
    from pyqt_formbuilder.protocols import ChipGroupAdapter, FieldOption

    adapter = ChipGroupAdapter(multi_select=True)
    adapter.set_options([FieldOption("x"), FieldOption("y"), FieldOption("z")])
    assert adapter.get_value() == []

    adapter.chip_for("z").click()
    adapter.chip_for("x").click()
    assert adapter.get_value() == ["x", "z"]

    adapter.set_value(["y"])
    assert adapter.get_value() == ["y"]


def test_chip_group_set_value_is_silent(qapp):
    from pyqt_formbuilder.protocols import ChipGroupAdapter, FieldOption

    adapter = ChipGroupAdapter()
    adapter.set_options([FieldOption("a"), FieldOption("b")])
    received = []
    adapter.connect_change_signal(received.append)
    adapter.set_value("b")
    assert adapter.get_value() == "b"
    assert received == []


def test_field_option_display_text():
    from pyqt_formbuilder.protocols import FieldOption

    assert FieldOption(3).display_text == "3"
    assert FieldOption(3, "Three").display_text == "Three"


def test_form_settings_roundtrip():
    from pyqt_formbuilder.protocols import (
        AutovalidateMode, FormBuilderSettings, get_form_settings, set_form_settings,
    )

    assert get_form_settings().warn_on_duplicate_names is True
    set_form_settings(FormBuilderSettings(default_autovalidate_mode=AutovalidateMode.ALWAYS))
    assert get_form_settings().default_autovalidate_mode is AutovalidateMode.ALWAYS


def test_form_config_resolves_autovalidate_mode_from_settings():
    from pyqt_formbuilder.protocols import (
        AutovalidateMode, FormBuilderConfig, FormBuilderSettings, set_form_settings,
    )

    config = FormBuilderConfig()
    assert config.resolved_autovalidate_mode() is AutovalidateMode.DISABLED

    set_form_settings(FormBuilderSettings(
        default_autovalidate_mode=AutovalidateMode.ON_USER_INTERACTION,
    ))
    assert config.resolved_autovalidate_mode() is AutovalidateMode.ON_USER_INTERACTION

    explicit = FormBuilderConfig(autovalidate_mode=AutovalidateMode.ALWAYS)
    assert explicit.resolved_autovalidate_mode() is AutovalidateMode.ALWAYS


def test_flag_context_manager_restores_on_exception():
    from pyqt_formbuilder.services import FlagContextManager, FormFlag

    class Holder:
        _in_reset = False

    holder = Holder()
    with pytest.raises(RuntimeError):
        with FlagContextManager.reset_context(holder):
            assert FlagContextManager.is_flag_set(holder, FormFlag.IN_RESET)
            raise RuntimeError("boom")
    assert holder._in_reset is False


def test_flag_context_manager_rejects_unknown_flags():
    from pyqt_formbuilder.services import FlagContextManager

    class Holder:
        _in_reset = False

    with pytest.raises(ValueError, match="Invalid flags"):
        with FlagContextManager.manage_flags(Holder(), _not_a_flag=True):
            pass
