"""
Shared pytest fixtures for snapspace tests.
"""

import pytest
from pubsub import pub

from snapspace.history import LayoutHistoryStore
from snapspace.protocol import Area, Monitor


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external resources")


@pytest.fixture
def mock_window():
    """Factory fixture for creating mock window objects."""

    class MockWindow:
        def __init__(self, object_id=1, title="test", app_id="test_app", maximized=False):
            self.object_id = object_id
            self.title = title
            self.app_id = app_id
            self.maximized = maximized
            self.unmaximize_calls = 0
            self.moves = []

        def unmaximize(self):
            self.unmaximize_calls += 1
            self.maximized = False

        def move_resize(self, x, y, width, height):
            self.moves.append((x, y, width, height))

        def __hash__(self):
            return hash(self.object_id)

        def __eq__(self, other):
            if not isinstance(other, MockWindow):
                return False
            return self.object_id == other.object_id

    return MockWindow


@pytest.fixture
def standard_area():
    """Standard 1920x1080 work area."""
    return Area(0, 0, 1920, 1080)


@pytest.fixture
def monitors():
    """Two side-by-side monitors; the primary one has a 32px top panel."""
    return [
        Monitor(
            index=0,
            geometry=Area(0, 0, 1920, 1080),
            work_area=Area(0, 32, 1920, 1048),
            is_primary=True,
        ),
        Monitor(
            index=1,
            geometry=Area(1920, 0, 2560, 1440),
            work_area=Area(1920, 0, 2560, 1440),
        ),
    ]


@pytest.fixture
def monitor_provider(monitors):
    """Monitor provider placing every window on a configurable monitor."""

    class MockMonitorProvider:
        def __init__(self):
            self.monitors = {m.key: m for m in monitors}
            self.window_monitor = monitors[0]

        def get_monitor_by_key(self, key):
            return self.monitors.get(key)

        def get_monitor_for_window(self, window):
            return self.window_monitor

    return MockMonitorProvider()


@pytest.fixture
def clock():
    """Deterministic millisecond clock advancing by 1000 per call."""

    class Clock:
        def __init__(self):
            self.now = 1_718_000_000_000

        def __call__(self):
            self.now += 1000
            return self.now

    return Clock()


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "data" / "layout-history.jsonl"


@pytest.fixture
def make_store(history_path, clock):
    """Factory for history stores sharing one log file and clock."""

    def _make(valid_ids=None, **kwargs):
        kwargs.setdefault("clock_fn", clock)
        valid_fn = (lambda: valid_ids) if valid_ids is not None else None
        return LayoutHistoryStore(history_path, valid_layout_ids_fn=valid_fn, **kwargs)

    return _make


@pytest.fixture
def bus():
    """The Pypubsub bus, with every listener removed afterwards."""
    yield pub
    pub.unsubAll()
