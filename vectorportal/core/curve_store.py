from __future__ import annotations

import logging
from typing import Iterable, Iterator

from PySide6.QtCore import QObject, Signal

from vectorportal.core.curve import Curve
from vectorportal.core.errors import CurveError, UnknownCurveError


logger = logging.getLogger(__name__)


class CurveStore(QObject):
    """
    Owns every finished curve, keyed by id.

    Curves are only ever added, replaced or dropped through :meth:`insert`,
    :meth:`update`, :meth:`remove`, :meth:`clear` and :meth:`replace_all`;
    each of them emits :attr:`changed` so the render cache can invalidate.
    """

    curve_inserted = Signal(int)
    curve_updated = Signal(int)
    curve_removed = Signal(int)
    changed = Signal()

    def __init__(self):
        super().__init__()
        self._curves: dict[int, Curve] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._curves)

    def __iter__(self) -> Iterator[Curve]:
        return iter(list(self._curves.values()))

    def __contains__(self, curve_id: object) -> bool:
        return curve_id in self._curves

    def is_empty(self) -> bool:
        return not self._curves

    def get(self, curve_id: int) -> Curve | None:
        return self._curves.get(curve_id)

    def curves(self) -> list[Curve]:
        return list(self._curves.values())

    def ids(self) -> list[int]:
        return list(self._curves)

    # ------------------------------------------------------------------
    # Identity allocation
    # ------------------------------------------------------------------
    def allocate_id(self) -> int:
        """Return an id that no stored curve uses and that was never handed out."""

        while self._next_id in self._curves:
            self._next_id += 1
        curve_id = self._next_id
        self._next_id += 1
        return curve_id

    def _reserve_ids_through(self, highest: int) -> None:
        self._next_id = max(self._next_id, highest + 1)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, curve: Curve) -> None:
        if curve.id in self._curves:
            raise CurveError(f"Curve {curve.id} is already stored.")
        self._curves[curve.id] = curve
        self._reserve_ids_through(curve.id)
        logger.debug("inserted %s curve %d", curve.kind.value, curve.id)
        self.curve_inserted.emit(curve.id)
        self.changed.emit()

    def update(self, curve_id: int, curve: Curve) -> None:
        if curve_id not in self._curves:
            raise UnknownCurveError(curve_id)
        if curve.id != curve_id:
            raise CurveError(f"Cannot store curve {curve.id} under id {curve_id}.")
        self._curves[curve_id] = curve
        logger.debug("updated curve %d", curve_id)
        self.curve_updated.emit(curve_id)
        self.changed.emit()

    def remove(self, curve_id: int) -> Curve:
        try:
            curve = self._curves.pop(curve_id)
        except KeyError:
            raise UnknownCurveError(curve_id) from None
        logger.debug("removed curve %d", curve_id)
        self.curve_removed.emit(curve_id)
        self.changed.emit()
        return curve

    def clear(self) -> list[Curve]:
        removed = list(self._curves.values())
        self._curves.clear()
        self.changed.emit()
        return removed

    def replace_all(self, curves: Iterable[Curve]) -> None:
        """Swap the whole collection, e.g. after loading a file."""

        replacement: dict[int, Curve] = {}
        for curve in curves:
            if curve.id in replacement:
                raise CurveError(f"Duplicate curve id {curve.id}.")
            replacement[curve.id] = curve
        self._curves = replacement
        if replacement:
            self._reserve_ids_through(max(replacement))
        self.changed.emit()
