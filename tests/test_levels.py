"""
Tests for RootLevel and BucketLevel.

These tests verify behavior, not implementation details.
"""

import dataclasses

import pytest
from sqlalchemy import text

from bucketsh.store import BucketStore
from bucketsh.vfs import Level, RootLevel, BucketLevel


@pytest.fixture
def store(tmp_path):
    store = BucketStore.open(tmp_path / "levels.db", create=True)
    yield store
    store.close()


@pytest.fixture
def root(store):
    return RootLevel(store)


@pytest.fixture
def bucket(root):
    """A bucket holding one value "a" and one nested bucket "b"."""
    assert root.mkdir("top")
    level = root.cd("top")
    assert level.put("a", "1")
    assert level.mkdir("b")
    return level


class TestRootLevel:
    """The root of the tree."""

    def test_no_parent(self, root):
        assert root.prev() is None

    def test_path(self, root):
        assert root.path == "/"

    def test_get_always_none(self, root, store):
        root.mkdir("people")
        assert root.get("people") is None
        assert root.get("anything") is None

    def test_put_rejected(self, root, capsys):
        root.mkdir("people")
        before = root.list()

        assert root.put("k", "v") is False
        assert "Cannot store values at root level" in capsys.readouterr().out
        assert root.list() == before

    def test_mkdir_and_list(self, root):
        assert root.mkdir("zoo")
        assert root.mkdir("apes")
        assert root.list() == ["apes/", "zoo/"]

    def test_mkdir_duplicate_reported(self, root, capsys):
        assert root.mkdir("people")
        assert root.mkdir("people") is False
        out = capsys.readouterr().out
        assert "Unable to create bucket at key people" in out
        assert "bucket already exists" in out

    def test_cd_missing(self, root):
        assert root.cd("nowhere") is None

    def test_root_of_root(self, root):
        assert root.root() is root


class TestBucketLevel:
    """Nested buckets."""

    def test_mkdir_then_cd(self, root):
        root.mkdir("x")
        child = root.cd("x")

        assert isinstance(child, BucketLevel)
        assert child.prev() is root
        assert child.name == "x"

    def test_put_then_get(self, bucket):
        assert bucket.put("k", "v")
        assert bucket.get("k") == b"v"

    def test_put_non_ascii(self, bucket):
        bucket.put("k", "héllo")
        assert bucket.get("k") == "héllo".encode("utf-8")

    def test_get_missing(self, bucket):
        assert bucket.get("missing") is None

    def test_get_bucket_is_none(self, bucket):
        assert bucket.get("b") is None

    def test_list_marks_buckets(self, bucket):
        assert bucket.list() == ["a", "b/"]

    def test_list_empty(self, bucket):
        assert bucket.cd("b").list() == []

    def test_cd_into_value_fails(self, bucket):
        assert bucket.cd("a") is None

    def test_put_over_bucket_reported(self, bucket, capsys):
        assert bucket.put("b", "v") is False
        out = capsys.readouterr().out
        assert "Unable to store v at b" in out
        assert "incompatible value" in out
        assert bucket.list() == ["a", "b/"]

    def test_mkdir_over_value_reported(self, bucket, capsys):
        assert bucket.mkdir("a") is False
        assert "Unable to create bucket at key a" in capsys.readouterr().out

    def test_rejected_put_keeps_earlier_writes(self, root, bucket, store, capsys):
        store.session.execute(text(
            "CREATE TRIGGER reject_boom BEFORE INSERT ON entries "
            "WHEN NEW.key = X'626f6f6d' "
            "BEGIN SELECT RAISE(ABORT, 'boom rejected'); END"
        ))

        assert bucket.put("boom", "x") is False
        assert "Unable to store x at boom" in capsys.readouterr().out
        assert root.list() == ["top/"]
        assert bucket.list() == ["a", "b/"]
        assert bucket.get("a") == b"1"

    def test_put_markup_is_not_rendered(self, bucket, capsys):
        bucket.put("b", "[bold]x[/bold]")
        assert "[bold]x[/bold]" in capsys.readouterr().out

    def test_nested_path(self, bucket):
        nested = bucket.cd("b")
        nested.mkdir("c")
        assert nested.cd("c").path == "/top/b/c"

    def test_root_walks_up(self, root, bucket):
        deep = bucket.cd("b")
        assert deep.root() is root

    def test_levels_are_immutable(self, bucket):
        with pytest.raises(dataclasses.FrozenInstanceError):
            bucket.name = "other"

    def test_navigation_returns_new_level(self, bucket):
        child = bucket.cd("b")
        assert child is not bucket
        assert bucket.path == "/top"

    def test_equal_levels(self, root):
        root.mkdir("x")
        assert root.cd("x") == root.cd("x")

    def test_repr(self, bucket):
        assert repr(bucket) == "BucketLevel(path='/top')"


def test_level_is_abstract():
    with pytest.raises(TypeError):
        Level()
