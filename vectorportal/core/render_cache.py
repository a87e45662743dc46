from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from vectorportal.core.curve import Curve, Preview
from vectorportal.core.curve_store import CurveStore


class RenderCache(QObject):
    """Decides when the draw list has to be rebuilt.

    The cache only reads the store. Any store mutation marks it dirty through
    :attr:`CurveStore.changed`; session transitions and caret ticks are
    reported by the owner through :meth:`mark_dirty`. The next call to
    :meth:`snapshot_for_render` rebuilds the list and clears the flag, and
    calls made while the flag is clear hand back the previous list object.
    """

    invalidated = Signal()

    def __init__(self, store: CurveStore):
        super().__init__()
        self._store = store
        self._dirty = True
        self._draw_list: list[Curve | Preview] | None = None
        self.rebuild_count = 0
        store.changed.connect(self.mark_dirty)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        was_dirty = self._dirty
        self._dirty = True
        if not was_dirty:
            self.invalidated.emit()

    def snapshot_for_render(
        self,
        excluded_id: int | None = None,
        preview: Preview | None = None,
    ) -> list[Curve | Preview]:
        if not self._dirty and self._draw_list is not None:
            return self._draw_list

        draw_list: list[Curve | Preview] = [
            curve for curve in self._store if curve.id != excluded_id
        ]
        if preview is not None:
            draw_list.append(preview)

        self._draw_list = draw_list
        self._dirty = False
        self.rebuild_count += 1
        return draw_list
