"""pytest configuration and fixtures for pyqt-formbuilder tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def registry():
    """Fresh validator registry with the built-ins."""
    from pyqt_formbuilder.validation import ValidatorRegistry
    return ValidatorRegistry()


@pytest.fixture(autouse=True)
def default_form_config():
    """Each test starts from the default global configuration."""
    from pyqt_formbuilder.protocols.form_config import set_form_config
    set_form_config(None)
    yield
    set_form_config(None)
