# Qt widgets need a platform plugin; tests run without a display.
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from mazebuilder.model.bounds import DimensionBounds


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def classic_bounds() -> DimensionBounds:
    return DimensionBounds(min_width=3, min_height=3, max_width=52, max_height=33)


@pytest.fixture
def wide_bounds() -> DimensionBounds:
    return DimensionBounds(min_width=3, min_height=3, max_width=120, max_height=33)
