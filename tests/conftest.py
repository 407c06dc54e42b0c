"""pytest configuration and fixtures for pyqt-formbuilder tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from pyqt_formbuilder.protocols import set_form_settings


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_form_settings():
    """Every test starts and ends with default process-wide settings."""
    set_form_settings(None)
    yield
    set_form_settings(None)
