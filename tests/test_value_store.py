"""Tests for the dual value store, transformer registry and field registry."""

import pytest

from pyqt_formbuilder.exceptions import InvalidFieldNameError
from pyqt_formbuilder.forms.field_registry import (
    FieldRegistry, RegistrationResult, UnregistrationResult,
)
from pyqt_formbuilder.forms.transformer_registry import TransformerRegistry
from pyqt_formbuilder.forms.value_store import DualValueStore

MISSING = object()


def _store(saved=MISSING, instant=MISSING, initial=MISSING) -> DualValueStore:
    store = DualValueStore({} if initial is MISSING else {"x": initial})
    if saved is not MISSING:
        store.set_instant("x", saved)
        store.commit()
    store.remove_instant("x")
    if instant is not MISSING:
        store.set_instant("x", instant)
    return store


@pytest.mark.parametrize("saved,instant,initial,from_saved,expected", [
    ("S", "I", "N", True, "S"),
    ("S", "I", "N", False, "I"),
    (MISSING, "I", "N", True, "I"),
    ("S", MISSING, "N", True, "S"),
    ("S", MISSING, "N", False, "N"),
    (MISSING, MISSING, "N", True, "N"),
    (MISSING, MISSING, "N", False, "N"),
    (MISSING, MISSING, MISSING, True, None),
    (MISSING, MISSING, MISSING, False, None),
    (MISSING, None, "N", False, None),
])
def test_get_raw_fallback_chain(saved, instant, initial, from_saved, expected):
    store = _store(saved=saved, instant=instant, initial=initial)
    assert store.get_raw("x", from_saved=from_saved) == expected


def test_commit_is_a_snapshot():
    store = DualValueStore()
    store.set_instant("a", 1)
    store.commit()
    store.set_instant("a", 2)
    store.set_instant("b", 3)
    assert dict(store.saved) == {"a": 1}
    assert dict(store.instant) == {"a": 2, "b": 3}


def test_commit_drops_values_removed_from_instant():
    store = DualValueStore()
    store.set_instant("a", 1)
    store.set_instant("b", 2)
    store.commit()
    store.remove_instant("b")
    store.commit()
    assert dict(store.saved) == {"a": 1}


def test_initial_map_is_read_only():
    store = DualValueStore({"a": 1})
    with pytest.raises(TypeError):
        store.initial["a"] = 2


def test_remove_instant_reports_presence():
    store = DualValueStore()
    assert store.remove_instant("a") is False
    store.set_instant("a", None)
    assert store.has_instant("a")
    assert store.remove_instant("a") is True
    assert not store.has_instant("a")


def test_transformer_registry_transforms_only_registered_names():
    registry = TransformerRegistry()
    registry["amount"] = lambda v: v * 100
    assert registry.transform("amount", 5) == 500
    assert registry.transform("other", 5) == 5
    assert registry.transform_all({"amount": 2, "other": 2}) == {"amount": 200, "other": 2}


def test_transform_all_keeps_raw_value_when_transformer_returns_none():
    registry = TransformerRegistry()
    registry["opt"] = lambda v: None
    assert registry.transform("opt", "raw") is None
    assert registry.transform_all({"opt": "raw"}) == {"opt": "raw"}


def test_transformer_registry_rejects_non_callables():
    registry = TransformerRegistry()
    with pytest.raises(TypeError):
        registry["amount"] = 100


def test_field_registry_insert_replace_remove():
    registry = FieldRegistry()
    a, b = object(), object()

    assert registry.add("x", a) == (RegistrationResult.INSERTED, None)
    assert registry.add("x", b) == (RegistrationResult.REPLACED, a)
    assert registry.get("x") is b

    assert registry.remove("x", a) is UnregistrationResult.STALE
    assert registry.get("x") is b
    assert registry.remove("x", b) is UnregistrationResult.REMOVED
    assert registry.remove("x", b) is UnregistrationResult.UNKNOWN
    assert len(registry) == 0


def test_field_registry_replacement_keeps_traversal_position():
    registry = FieldRegistry()
    first, second, replacement = object(), object(), object()
    registry.add("first", first)
    registry.add("second", second)
    registry.add("first", replacement)
    assert list(registry) == ["first", "second"]
    assert registry.first() is replacement


@pytest.mark.parametrize("name", ["", None])
def test_field_registry_rejects_empty_names(name):
    registry = FieldRegistry()
    with pytest.raises(InvalidFieldNameError):
        registry.add(name, object())
    assert issubclass(InvalidFieldNameError, ValueError)
