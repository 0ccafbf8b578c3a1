import pytest

from toggle_engine.errors import AlreadySavedError, SnapshotNotFoundError
from toggle_engine.store import StateStore


def test_save_then_load() -> None:
    store = StateStore()

    store.save("buf:1", "synmaxcol", 200)

    assert store.has("buf:1", "synmaxcol")
    assert store.load("buf:1", "synmaxcol") == 200


def test_save_twice_raises_and_keeps_original() -> None:
    store = StateStore()
    store.save("buf:1", "formatprg", "prettier")

    with pytest.raises(AlreadySavedError) as info:
        store.save("buf:1", "formatprg", "black")

    assert info.value.scope == "buf:1"
    assert store.load("buf:1", "formatprg") == "prettier"


def test_load_missing_raises() -> None:
    store = StateStore()

    with pytest.raises(SnapshotNotFoundError):
        store.load("win:2", "scrollbind")


def test_delete_missing_is_noop() -> None:
    store = StateStore()

    store.delete("win:2", "scrollbind")

    assert len(store) == 0


def test_scopes_are_disjoint() -> None:
    store = StateStore()
    store.save("buf:1", "synmaxcol", 200)
    store.save("buf:2", "synmaxcol", 500)

    store.delete("buf:1", "synmaxcol")

    assert not store.has("buf:1", "synmaxcol")
    assert store.load("buf:2", "synmaxcol") == 500
    assert list(store.scopes()) == ["buf:2"]


def test_drop_scope_removes_every_key() -> None:
    store = StateStore()
    store.save("buf:1", "synmaxcol", 200)
    store.save("buf:1", "formatprg", "prettier")
    store.save("buf:3", "formatprg", "")

    removed = store.drop_scope("buf:1")

    assert removed == 2
    assert store.keys("buf:1") == ()
    assert store.drop_scope("buf:1") == 0
    assert len(store) == 1
