import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from vectorportal.core.curve_store import CurveStore
from vectorportal.core.drawing_context import DrawingContext, DrawMode
from vectorportal.core.pending import PendingStateMachine


@pytest.fixture
def qapp():
    """
    Creates a QApplication if none exists so timers and signals have an event loop.
    """
    # Use sys.argv to avoid issues on some platforms.
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    app.quit()


class SignalRecorder:
    """Collects the payloads emitted by a state machine."""

    def __init__(self, machine: PendingStateMachine):
        self.created = []
        self.changed = []
        self.states = []
        self.misses = []
        self.preview_changes = 0
        machine.curve_created.connect(self.created.append)
        machine.curve_changed.connect(self.changed.append)
        machine.state_changed.connect(self.states.append)
        machine.hit_missed.connect(self.misses.append)
        machine.preview_changed.connect(self._on_preview_changed)

    def _on_preview_changed(self):
        self.preview_changes += 1


@pytest.fixture
def store():
    return CurveStore()


@pytest.fixture
def context():
    drawing_context = DrawingContext()
    drawing_context.set_mode(DrawMode.NEW)
    return drawing_context


@pytest.fixture
def machine(store, context):
    return PendingStateMachine(store, context, hit_radius=10.0)


@pytest.fixture
def recorder(machine):
    return SignalRecorder(machine)
