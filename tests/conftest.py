"""Shared fixtures for the arrowhead tests."""
import pytest

from arrowhead.config import AppConfig
from arrowhead.graphics.canvas import SegmentCanvas


@pytest.fixture
def canvas():
    """A fresh canvas over the in-memory surface."""
    return SegmentCanvas()


@pytest.fixture
def cfg():
    """Default config with a fixed view size."""
    return AppConfig(view_width=900, view_height=700)


class RecordingSurface:
    """Host surface that remembers every call it receives."""

    def __init__(self):
        self.calls = []
        self.items = {}

    def add(self, segment):
        self.calls.append(("add", segment.handle))
        self.items[segment.handle] = segment

    def remove(self, segment):
        self.calls.append(("remove", segment.handle))
        self.items.pop(segment.handle, None)


@pytest.fixture
def recording_surface():
    return RecordingSurface()
