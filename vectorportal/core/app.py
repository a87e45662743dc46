from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, Slot

from vectorportal.core.caret_blinker import CaretBlinker
from vectorportal.core.command import (
    AddCurveCommand,
    ClearCurvesCommand,
    RemoveCurveCommand,
    UpdateCurveCommand,
)
from vectorportal.core.curve import Curve, Preview
from vectorportal.core.curve_archive import load_curves, save_curves
from vectorportal.core.curve_store import CurveStore
from vectorportal.core.drawing_context import DrawingContext, DrawMode
from vectorportal.core.errors import ConfigurationError, CurveFormatError
from vectorportal.core.geometry import Point
from vectorportal.core.pending import PendingStateMachine
from vectorportal.core.render_cache import RenderCache
from vectorportal.core.settings_controller import SettingsController
from vectorportal.core.undo import UndoManager


logger = logging.getLogger(__name__)


class App(QObject):
    """Application orchestrator wiring the session machine to the store."""

    error_raised = Signal(str)
    undo_stack_changed = Signal()

    def __init__(self, settings_controller: SettingsController | None = None):
        super().__init__()
        if settings_controller is None:
            settings_controller = SettingsController()
        self.settings_controller = settings_controller

        self.drawing_context = DrawingContext()
        self._apply_settings_to_context()

        self.store = CurveStore()
        self.render_cache = RenderCache(self.store)
        self.undo_manager = UndoManager()
        self.undo_manager.stack_changed.connect(self.undo_stack_changed.emit)

        self.state_machine = PendingStateMachine(
            self.store,
            self.drawing_context,
            hit_radius=settings_controller.effective_hit_radius,
        )
        self.caret_blinker = CaretBlinker(settings_controller.blink_interval_ms, self)

        self.state_machine.curve_created.connect(self._on_curve_created)
        self.state_machine.curve_changed.connect(self._on_curve_changed)
        self.state_machine.state_changed.connect(self._on_state_changed)
        self.state_machine.preview_changed.connect(self.render_cache.mark_dirty)
        self.state_machine.hit_missed.connect(self._on_hit_missed)
        self.caret_blinker.ticked.connect(self.state_machine.on_tick)
        self.drawing_context.kind_changed.connect(self._on_kind_changed)

    def _apply_settings_to_context(self):
        settings = self.settings_controller
        context = self.drawing_context
        context.default_width = settings.width
        context.set_width(settings.width)
        context.set_side_count(settings.side_count)
        context.set_color(settings.color_name)
        context.set_background_color(settings.background_name)

    # ------------------------------------------------------------------
    # Mode and style
    # ------------------------------------------------------------------
    @Slot(object)
    def set_mode(self, mode) -> bool:
        if isinstance(mode, str):
            mode = DrawMode(mode)
        if mode in (DrawMode.EDIT, DrawMode.ROTATE) and self.store.is_empty():
            logger.info("Ignoring %s mode: there are no curves yet", mode.value)
            return False
        self.state_machine.cancel()
        self.drawing_context.set_mode(mode)
        self.render_cache.mark_dirty()
        return True

    @Slot(object)
    def set_kind(self, kind):
        self.drawing_context.set_kind(kind)

    def _on_kind_changed(self, _kind):
        self.state_machine.cancel()

    # ------------------------------------------------------------------
    # Input forwarding
    # ------------------------------------------------------------------
    def pointer_down(self, position: Point) -> None:
        try:
            self.state_machine.on_pointer_down(position)
        except ConfigurationError as e:
            self._report_error(str(e))

    def pointer_move(self, position: Point) -> None:
        self.state_machine.on_pointer_move(position)

    def scroll(self, delta: float) -> None:
        self.state_machine.on_scroll(delta)

    def key_press(self, key) -> None:
        self.state_machine.on_key(key)

    def text_input(self, text: str) -> None:
        self.state_machine.on_text(text)

    # ------------------------------------------------------------------
    # Session outputs
    # ------------------------------------------------------------------
    def _on_curve_created(self, curve: Curve):
        self.undo_manager.push(AddCurveCommand(self.store, curve))

    def _on_curve_changed(self, curve: Curve):
        self.undo_manager.push(UpdateCurveCommand(self.store, curve))

    def _on_state_changed(self, _state):
        if self.state_machine.is_composing_text():
            self.caret_blinker.start()
        else:
            self.caret_blinker.stop()
        self.render_cache.mark_dirty()

    def _on_hit_missed(self, position: Point):
        logger.debug("Nothing to pick near (%.1f, %.1f)", position.x, position.y)

    def _report_error(self, message: str):
        logger.warning(message)
        self.error_raised.emit(message)

    # ------------------------------------------------------------------
    # Store level actions
    # ------------------------------------------------------------------
    def clear(self):
        self.state_machine.cancel()
        if self.store.is_empty():
            return
        self.undo_manager.push(ClearCurvesCommand(self.store))

    def remove_curve(self, curve_id: int) -> bool:
        if curve_id not in self.store:
            self._report_error(f"No curve with id {curve_id}")
            return False
        if self.state_machine.excluded_id == curve_id:
            self.state_machine.cancel()
        self.undo_manager.push(RemoveCurveCommand(self.store, curve_id))
        return True

    def undo(self) -> bool:
        self.state_machine.cancel()
        return self.undo_manager.undo()

    def redo(self) -> bool:
        self.state_machine.cancel()
        return self.undo_manager.redo()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self, path: str | None = None) -> bool:
        path = path or self.settings_controller.data_file
        try:
            save_curves(path, self.store.curves())
        except OSError as e:
            self._report_error(f"Could not save {path}: {e}")
            return False
        return True

    def load(self, path: str | None = None) -> bool:
        path = path or self.settings_controller.data_file
        try:
            curves = load_curves(path)
        except (CurveFormatError, OSError) as e:
            self._report_error(f"Could not load {path}: {e}")
            return False
        self.state_machine.cancel()
        self.store.replace_all(curves)
        self.undo_manager.clear()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> list[Curve | Preview]:
        return self.render_cache.snapshot_for_render(
            self.state_machine.excluded_id,
            self.state_machine.preview(),
        )
