"""The interactive session state machine.

Exactly one pending state is active at a time. Construction, editing and
rotation are each a short chain of states; finished or modified curves leave
the machine through :attr:`PendingStateMachine.curve_created` and
:attr:`PendingStateMachine.curve_changed`, and the machine never writes to the
store itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QColor

from vectorportal.core.curve import (
    Curve,
    GeometryKind,
    Preview,
    minimum_side_count,
    required_points,
)
from vectorportal.core.curve_store import CurveStore
from vectorportal.core.drawing_context import DrawingContext, DrawMode
from vectorportal.core.errors import ConfigurationError
from vectorportal.core.geometry import Point, normalize_angle
from vectorportal.core.hit_test import hit_curve, hit_point


logger = logging.getLogger(__name__)

ENTER_KEYS = (Qt.Key_Return, Qt.Key_Enter)


@dataclass(frozen=True)
class PendingConstruction:
    kind: GeometryKind
    points: tuple[Point, ...]
    color: QColor
    width: float
    side_count: int | None = None
    content: str = ""

    @property
    def required(self) -> int | None:
        return required_points(self.kind, self.side_count)

    def with_point(self, position: Point) -> "PendingConstruction":
        return replace(self, points=self.points + (position,))

    def is_complete(self) -> bool:
        required = self.required
        if required is None or self.kind is GeometryKind.TEXT:
            return False
        return len(self.points) >= required

    def finish(self, curve_id: int) -> Curve:
        return Curve(
            id=curve_id,
            kind=self.kind,
            points=self.points,
            color=self.color,
            width=self.width,
            side_count=self.side_count,
            content=self.content,
        )


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Constructing:
    construction: PendingConstruction


@dataclass(frozen=True)
class EditSelectTarget:
    pass


@dataclass(frozen=True)
class EditSelectPoint:
    target_id: int


@dataclass(frozen=True)
class EditApply:
    target_id: int
    point_index: int


@dataclass(frozen=True)
class RotateSelectTarget:
    pass


@dataclass(frozen=True)
class RotateActive:
    target_id: int
    accumulated_angle: float = 0.0


PendingState = Union[
    Idle,
    Constructing,
    EditSelectTarget,
    EditSelectPoint,
    EditApply,
    RotateSelectTarget,
    RotateActive,
]


class PendingStateMachine(QObject):
    """Turns pointer, scroll, key and timer input into curve changes."""

    state_changed = Signal(object)
    preview_changed = Signal()
    curve_created = Signal(object)
    curve_changed = Signal(object)
    hit_missed = Signal(object)

    def __init__(
        self,
        store: CurveStore,
        context: DrawingContext,
        hit_radius: float | None = None,
    ):
        super().__init__()
        self.store = store
        self.context = context
        self.hit_radius = hit_radius
        self._state: PendingState = Idle()
        self._cursor: Point | None = None
        self.caret_visible = False

    @property
    def state(self) -> PendingState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    def is_composing_text(self) -> bool:
        state = self._state
        return (
            isinstance(state, Constructing)
            and state.construction.kind is GeometryKind.TEXT
        )

    @property
    def excluded_id(self) -> int | None:
        """Id of the stored curve that the preview currently stands in for."""

        state = self._state
        if isinstance(state, (EditSelectPoint, EditApply, RotateActive)):
            return state.target_id
        return None

    def _set_state(self, state: PendingState) -> None:
        entering_text = not self.is_composing_text()
        self._state = state
        if entering_text and self.is_composing_text():
            self.caret_visible = True
        logger.debug("pending state -> %r", state)
        self.state_changed.emit(state)

    def cancel(self) -> None:
        """Abandon the active session without producing a curve."""

        if self.is_idle:
            return
        logger.debug("cancelled %r", self._state)
        self._set_state(Idle())

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def on_pointer_down(self, position: Point) -> None:
        self._cursor = position
        state = self._state
        if isinstance(state, Idle):
            self._start_session(position)
        elif isinstance(state, Constructing):
            self._add_construction_point(state.construction, position)
        elif isinstance(state, (EditSelectTarget, RotateSelectTarget)):
            self._select_target(position, rotate=isinstance(state, RotateSelectTarget))
        elif isinstance(state, EditSelectPoint):
            self._select_edit_point(state, position)
        elif isinstance(state, EditApply):
            self._apply_edit(state, position)
        elif isinstance(state, RotateActive):
            self._commit_rotation(state)
        else:
            raise TypeError(f"Unhandled pending state {state!r}")

    def on_pointer_move(self, position: Point) -> None:
        self._cursor = position
        if isinstance(self._state, (Constructing, EditApply)):
            self.preview_changed.emit()

    def on_scroll(self, delta: float) -> None:
        state = self._state
        if not isinstance(state, RotateActive):
            return
        angle = normalize_angle(state.accumulated_angle + delta)
        self._set_state(replace(state, accumulated_angle=angle))

    def on_key(self, key) -> None:
        if key == Qt.Key_Escape:
            self.cancel()
            return

        state = self._state
        if not isinstance(state, Constructing):
            return
        construction = state.construction
        if key in ENTER_KEYS:
            if construction.kind is GeometryKind.FREEHAND and construction.points:
                self._emit_created(construction)
        elif key == Qt.Key_Backspace:
            if construction.kind is GeometryKind.TEXT and construction.content:
                trimmed = replace(construction, content=construction.content[:-1])
                self._set_state(Constructing(trimmed))

    def on_text(self, text: str) -> None:
        if not self.is_composing_text():
            return
        printable = "".join(ch for ch in text if ch.isprintable())
        if not printable:
            return
        construction = self._state.construction
        self._set_state(
            Constructing(replace(construction, content=construction.content + printable))
        )

    def on_tick(self) -> None:
        if not self.is_composing_text():
            return
        self.caret_visible = not self.caret_visible
        self.preview_changed.emit()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _start_session(self, position: Point) -> None:
        mode = self.context.mode
        if mode is DrawMode.NEW:
            self._start_construction(position)
        elif mode is DrawMode.EDIT:
            self._set_state(EditSelectTarget())
            self._select_target(position, rotate=False)
        elif mode is DrawMode.ROTATE:
            self._set_state(RotateSelectTarget())
            self._select_target(position, rotate=True)

    def _start_construction(self, position: Point) -> None:
        kind = self.context.kind
        if kind is None:
            return

        side_count = None
        if kind.uses_side_count:
            side_count = self.context.side_count
            minimum = minimum_side_count(kind)
            if side_count is None or side_count < minimum:
                raise ConfigurationError(
                    f"{kind.value} needs a side count of at least {minimum}, "
                    f"got {side_count!r}"
                )

        construction = PendingConstruction(
            kind=kind,
            points=(position,),
            color=QColor(self.context.color),
            width=self.context.width,
            side_count=side_count,
        )
        if construction.is_complete():
            self._emit_created(construction)
        else:
            self._set_state(Constructing(construction))

    def _add_construction_point(self, construction: PendingConstruction, position: Point) -> None:
        if construction.kind is GeometryKind.TEXT:
            # The anchor is already placed; this click ends composition.
            if construction.content:
                self._emit_created(construction)
            else:
                logger.debug("discarding empty text at %r", construction.points[0])
                self._set_state(Idle())
            return

        construction = construction.with_point(position)
        if construction.is_complete():
            self._emit_created(construction)
        else:
            self._set_state(Constructing(construction))

    def _emit_created(self, construction: PendingConstruction) -> None:
        curve = construction.finish(self.store.allocate_id())
        self._set_state(Idle())
        logger.debug("created %s curve %d", curve.kind.value, curve.id)
        self.curve_created.emit(curve)

    # ------------------------------------------------------------------
    # Edit and rotate
    # ------------------------------------------------------------------
    def _select_target(self, position: Point, *, rotate: bool) -> None:
        hit = hit_curve(position, self.store, self.hit_radius)
        if hit is None:
            self._report_miss(position)
            return
        if rotate:
            self._set_state(RotateActive(hit.key))
        else:
            self._set_state(EditSelectPoint(hit.key))

    def _select_edit_point(self, state: EditSelectPoint, position: Point) -> None:
        target = self._target(state.target_id)
        if target is None:
            return
        hit = hit_point(position, target, self.hit_radius)
        if hit is None:
            self._report_miss(position)
            return
        self._set_state(EditApply(state.target_id, hit.key))

    def _apply_edit(self, state: EditApply, position: Point) -> None:
        target = self._target(state.target_id)
        if target is None:
            return
        updated = target.moved_to(state.point_index, position)
        self._set_state(Idle())
        self.curve_changed.emit(updated)

    def _commit_rotation(self, state: RotateActive) -> None:
        target = self._target(state.target_id)
        if target is None:
            return
        rotated = target.rotated(state.accumulated_angle)
        self._set_state(Idle())
        self.curve_changed.emit(rotated)

    def _target(self, curve_id: int) -> Curve | None:
        target = self.store.get(curve_id)
        if target is None:
            logger.warning("curve %d disappeared mid-session; cancelling", curve_id)
            self._set_state(Idle())
        return target

    def _report_miss(self, position: Point) -> None:
        logger.debug("no candidate near %r", position)
        self.hit_missed.emit(position)

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------
    def preview(self) -> Preview | None:
        state = self._state
        if isinstance(state, Constructing):
            return self._construction_preview(state.construction)
        if isinstance(state, EditSelectPoint):
            target = self.store.get(state.target_id)
            if target is not None:
                return Preview.from_curve(target, highlighted=True)
        elif isinstance(state, EditApply):
            target = self.store.get(state.target_id)
            if target is not None:
                if self._cursor is not None:
                    target = target.moved_to(state.point_index, self._cursor)
                return Preview.from_curve(target, highlighted=True)
        elif isinstance(state, RotateActive):
            target = self.store.get(state.target_id)
            if target is not None:
                return Preview.from_curve(
                    target.rotated(state.accumulated_angle), highlighted=True
                )
        return None

    def _construction_preview(self, construction: PendingConstruction) -> Preview:
        points = construction.points
        if construction.kind is not GeometryKind.TEXT and self._cursor is not None:
            points = points + (self._cursor,)
        return Preview(
            kind=construction.kind,
            points=points,
            color=construction.color,
            width=construction.width,
            side_count=construction.side_count,
            content=construction.content,
            caret_visible=(
                self.caret_visible and construction.kind is GeometryKind.TEXT
            ),
        )
