import pytest

from vectorportal.core.curve import Curve, GeometryKind
from vectorportal.core.curve_store import CurveStore
from vectorportal.core.errors import CurveError, UnknownCurveError
from vectorportal.core.geometry import Point


def line(curve_id, y=0):
    return Curve(id=curve_id, kind=GeometryKind.LINE, points=(Point(0, y), Point(10, y)))


def test_allocate_id_is_sequential():
    store = CurveStore()
    assert [store.allocate_id() for _ in range(3)] == [1, 2, 3]


def test_insert_emits_signals():
    store = CurveStore()
    inserted = []
    changes = []
    store.curve_inserted.connect(inserted.append)
    store.changed.connect(lambda: changes.append(True))

    store.insert(line(1))

    assert inserted == [1]
    assert changes == [True]
    assert 1 in store
    assert len(store) == 1
    assert store.get(1) == line(1)


def test_insert_duplicate_id_raises():
    store = CurveStore()
    store.insert(line(1))
    with pytest.raises(CurveError):
        store.insert(line(1, y=5))


def test_update_replaces_curve():
    store = CurveStore()
    store.insert(line(1))
    updated = []
    store.curve_updated.connect(updated.append)

    store.update(1, line(1, y=7))

    assert store.get(1).points[0] == Point(0, 7)
    assert updated == [1]


def test_update_rejects_unknown_or_mismatched_id():
    store = CurveStore()
    with pytest.raises(UnknownCurveError):
        store.update(3, line(3))
    store.insert(line(1))
    with pytest.raises(CurveError):
        store.update(1, line(2))


def test_remove():
    store = CurveStore()
    store.insert(line(1))
    removed = []
    store.curve_removed.connect(removed.append)

    assert store.remove(1) == line(1)
    assert store.is_empty()
    assert removed == [1]
    with pytest.raises(KeyError):
        store.remove(1)


def test_ids_are_not_reused_after_removal():
    store = CurveStore()
    first = store.allocate_id()
    store.insert(line(first))
    store.remove(first)
    assert store.allocate_id() == first + 1


def test_replace_all_reserves_loaded_ids():
    store = CurveStore()
    store.replace_all([line(4), line(9)])

    assert store.ids() == [4, 9]
    assert store.allocate_id() == 10


def test_replace_all_rejects_duplicates():
    store = CurveStore()
    with pytest.raises(CurveError):
        store.replace_all([line(2), line(2)])


def test_clear_returns_removed_curves():
    store = CurveStore()
    store.insert(line(1))
    store.insert(line(2))
    assert store.clear() == [line(1), line(2)]
    assert store.is_empty()
