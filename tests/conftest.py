"""
Pytest configuration: local imports and shared fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest


#============================================
def _ensure_src_on_path() -> None:
    """
    Ensure the repository src directory is on sys.path.
    """
    src_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
    if src_root not in sys.path:
        sys.path.insert(0, src_root)


_ensure_src_on_path()

from table_drawer.surface import RecordingSurface  # noqa: E402


#============================================
class FakeMetrics:
    """
    Deterministic font metrics: every character is CHAR_WIDTH points wide at
    size 10 and the line height is LINE_HEIGHT points at size 10, both scaling
    linearly with size.
    """

    CHAR_WIDTH = 5.0
    LINE_HEIGHT = 10.0

    def line_height(self, font_name: str, font_size: float) -> float:
        return self.LINE_HEIGHT * font_size / 10.0

    def string_width(self, text: str, font_name: str, font_size: float) -> float:
        return len(text) * self.CHAR_WIDTH * font_size / 10.0


#============================================
@pytest.fixture
def metrics() -> FakeMetrics:
    """
    Fake font metrics at 5 pt per character and 10 pt per line (size 10).
    """
    return FakeMetrics()


#============================================
@pytest.fixture
def surface() -> RecordingSurface:
    """
    Fresh recording surface.
    """
    return RecordingSurface()
