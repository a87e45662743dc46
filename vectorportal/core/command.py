from __future__ import annotations

from abc import ABC, abstractmethod

from vectorportal.core.curve import Curve
from vectorportal.core.curve_store import CurveStore


class Command(ABC):
    """A reversible change to the curve store."""

    @abstractmethod
    def execute(self):
        raise NotImplementedError

    @abstractmethod
    def undo(self):
        raise NotImplementedError


class AddCurveCommand(Command):
    def __init__(self, store: CurveStore, curve: Curve):
        self.store = store
        self.curve = curve

    def execute(self):
        self.store.insert(self.curve)

    def undo(self):
        self.store.remove(self.curve.id)


class UpdateCurveCommand(Command):
    """Replace a stored curve, remembering what it looked like before."""

    def __init__(self, store: CurveStore, curve: Curve):
        self.store = store
        self.curve = curve
        self.before: Curve | None = None

    def execute(self):
        if self.before is None:
            self.before = self.store.get(self.curve.id)
        self.store.update(self.curve.id, self.curve)

    def undo(self):
        if self.before is not None:
            self.store.update(self.before.id, self.before)


class RemoveCurveCommand(Command):
    def __init__(self, store: CurveStore, curve_id: int):
        self.store = store
        self.curve_id = curve_id
        self.removed: Curve | None = None

    def execute(self):
        self.removed = self.store.remove(self.curve_id)

    def undo(self):
        if self.removed is not None:
            self.store.insert(self.removed)


class ReplaceCurvesCommand(Command):
    """Swap the entire store contents; clearing is a replacement with nothing."""

    def __init__(self, store: CurveStore, curves: list[Curve], name: str = "Replace"):
        self.store = store
        self.curves = list(curves)
        self.name = name
        self.before: list[Curve] | None = None

    def execute(self):
        if self.before is None:
            self.before = self.store.curves()
        self.store.replace_all(self.curves)

    def undo(self):
        if self.before is not None:
            self.store.replace_all(self.before)


class ClearCurvesCommand(ReplaceCurvesCommand):
    def __init__(self, store: CurveStore):
        super().__init__(store, [], name="Clear")
