"""Tests for FormBuilder and the field widgets."""

import pytest
from PyQt6.QtCore import QCoreApplication, QEvent

from pyqt_formbuilder.forms import (
    FormBuilder, FormBuilderCheckbox, FormBuilderChoiceChip, FormBuilderDoubleSpinBox,
    FormBuilderDropdown, FormBuilderFilterChip, FormBuilderSpinBox, FormBuilderTextField,
)
from pyqt_formbuilder.forms.field_registry import RegistrationResult, UnregistrationResult
from pyqt_formbuilder.protocols import AutovalidateMode, FieldOption, FormBuilderConfig


def _required(value):
    return None if value else "Required"


@pytest.fixture
def builder(qapp):
    form = FormBuilder(FormBuilderConfig(initial_value={"email": None, "age": 30}))
    yield form
    form.dispose()


def test_text_field_edits_flow_into_form(builder):
    email = builder.create_field(FormBuilderTextField, "email", label="Email",
                                 validator=_required)
    builder.create_field(FormBuilderSpinBox, "age")

    email.adapter.setText("a@b.com")
    assert builder.instant_value["email"] == "a@b.com"
    assert dict(builder.value) == {}

    assert builder.save_and_validate() is True
    assert dict(builder.value) == {"email": "a@b.com", "age": 30}


def test_spin_box_shows_initial_value_from_config(builder):
    age = builder.create_field(FormBuilderSpinBox, "age", minimum=-1, maximum=150)
    assert age.adapter.value() == 30
    assert age.adapter.get_value() == 30

    age.adapter.setValue(-1)
    assert builder.instant_value["age"] is None


def test_double_spin_box(builder):
    price = builder.create_field(FormBuilderDoubleSpinBox, "price", decimals=2)
    price.adapter.setValue(9.5)
    assert builder.instant_value["price"] == 9.5


def test_patch_and_reset_update_widgets(builder):
    email = builder.create_field(FormBuilderTextField, "email")

    builder.patch_value({"email": "x@y.com", "phone": "555"})
    assert email.adapter.text() == "x@y.com"
    assert "phone" not in builder.instant_value

    builder.reset()
    assert email.adapter.text() == ""
    assert builder.instant_value["email"] is None


def test_choice_chip(builder):
    size = builder.create_field(
        FormBuilderChoiceChip, "size",
        options=[FieldOption(1, "S"), FieldOption(2, "M"), FieldOption(3, "L")],
    )
    size.adapter.chip_for(1).click()
    size.adapter.chip_for(3).click()

    assert builder.instant_value["size"] == 3
    assert not size.adapter.chip_for(1).isChecked()

    builder.patch_value({"size": 2})
    assert size.adapter.chip_for(2).isChecked()
    assert not size.adapter.chip_for(3).isChecked()


def test_filter_chip(builder):
    tags = builder.create_field(
        FormBuilderFilterChip, "tags",
        options=[FieldOption("red"), FieldOption("green"), FieldOption("blue")],
    )
    tags.adapter.chip_for("blue").click()
    tags.adapter.chip_for("red").click()

    assert builder.instant_value["tags"] == ["red", "blue"]
    assert tags.selected == ["red", "blue"]


def test_dropdown_and_checkbox(builder):
    country = builder.create_field(
        FormBuilderDropdown, "country",
        options=[FieldOption("fr", "France"), FieldOption("de", "Germany")],
        placeholder="Choose...",
    )
    terms = builder.create_field(FormBuilderCheckbox, "terms", text="I agree")
    assert builder.instant_value["country"] is None

    country.adapter.setCurrentIndex(1)
    terms.adapter.setChecked(True)

    assert builder.instant_value["country"] == "de"
    assert builder.instant_value["terms"] is True


def test_value_transformer_on_widget_field(builder):
    builder.create_field(FormBuilderSpinBox, "cents", value_transformer=lambda v: v / 100)
    builder.patch_value({"cents": 250})
    builder.save()
    assert builder.value["cents"] == 2.5


def test_error_label_follows_validation(builder):
    email = builder.create_field(FormBuilderTextField, "email", validator=_required,
                                 autovalidate_mode=AutovalidateMode.ON_USER_INTERACTION)
    assert email.error_label.isHidden()

    assert builder.validate() is False
    assert not email.error_label.isHidden()
    assert email.error_label.text() == "Required"

    email.adapter.setText("ok")
    assert email.error_label.isHidden()

    builder.invalidate_field("email", "Already registered")
    assert email.error_label.text() == "Already registered"


def test_disabled_form_disables_adapters(qapp):
    form = FormBuilder(FormBuilderConfig(enabled=False))
    email = form.create_field(FormBuilderTextField, "email")
    assert not email.adapter.isEnabled()

    form.set_enabled(True)
    assert email.adapter.isEnabled()

    email.state.set_enabled(False)
    assert not email.adapter.isEnabled()
    form.dispose()


def test_widget_replacement_keeps_draft(builder):
    first = builder.create_field(FormBuilderTextField, "email")
    first.adapter.setText("draft")

    second = builder.create_field(FormBuilderTextField, "email")
    assert second.registration_result is RegistrationResult.REPLACED
    assert second.adapter.text() == "draft"

    assert first.detach() is UnregistrationResult.STALE
    assert builder.fields["email"] is second.state


def test_destroyed_widget_unregisters(builder):
    email = builder.create_field(FormBuilderTextField, "email")
    assert "email" in builder.fields

    email.deleteLater()
    QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete.value)

    assert "email" not in builder.fields


def test_unattached_field_widget(builder):
    email = FormBuilderTextField("email", builder.form_state, attach=False)
    assert email.registration_result is None
    assert "email" not in builder.fields

    assert email.attach() is RegistrationResult.INSERTED
    assert builder.fields["email"] is email.state


# ========== DISMISSAL ==========

def test_will_pop_defaults_to_true(builder):
    assert builder.will_pop() is True


def test_dismiss_guard_vetoes_close(qapp):
    allowed = [False]
    form = FormBuilder(FormBuilderConfig(on_will_pop=lambda: allowed[0]))
    form.show()
    form.install_dismiss_guard()

    assert form.close() is False
    assert form.isVisible()

    allowed[0] = True
    assert form.close() is True
    form.dispose()


def test_dispose_removes_dismiss_guard(qapp):
    form = FormBuilder(FormBuilderConfig(on_will_pop=lambda: False))
    form.show()
    form.install_dismiss_guard()
    form.dispose()
    assert form.close() is True
