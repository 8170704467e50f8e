"""Tests for dotted-key value trees."""

import pytest

from image_scrapbook.exceptions import KeyConflictError, MalformedSpecError
from image_scrapbook.tree import Branch, Leaf, ValueTree


def test_insert_siblings():
    """Test that sibling keys share their parent branch."""
    tree = ValueTree()
    tree.insert("a.b", "x")
    tree.insert("a.c", "y")
    assert tree.to_dict() == {"a": {"b": "x", "c": "y"}}


def test_insert_top_level():
    """Test inserting a key without dots."""
    tree = ValueTree()
    tree.insert("digest", "sha256:abcd")
    assert tree == {"digest": "sha256:abcd"}
    assert len(tree) == 1


def test_insert_deep():
    """Test that missing intermediate branches are created."""
    tree = ValueTree()
    tree.insert("global.images.api.digest", "sha256:1")
    tree.insert("global.images.web.digest", "sha256:2")
    tree.insert("global.replicas", "3")

    assert tree.to_dict() == {
        "global": {
            "images": {"api": {"digest": "sha256:1"}, "web": {"digest": "sha256:2"}},
            "replicas": "3",
        }
    }
    assert isinstance(tree.root.children["global"], Branch)
    assert isinstance(tree.root.children["global"].children["replicas"], Leaf)


def test_insert_overwrites_exact_key():
    """Test that the last value inserted at a key wins."""
    tree = ValueTree()
    tree.insert("image.tag", "old")
    tree.insert("image.tag", "new")
    assert tree.to_dict() == {"image": {"tag": "new"}}


def test_insert_replaces_branch_with_value():
    """Test that setting a key holding a subtree replaces the subtree."""
    tree = ValueTree()
    tree.insert("image.tag", "x")
    tree.insert("image", "plain")
    assert tree.to_dict() == {"image": "plain"}


def test_insert_through_value_fails():
    """Test that descending through an existing scalar is an error."""
    tree = ValueTree()
    tree.insert("image", "plain")

    with pytest.raises(KeyConflictError, match="'image' already holds"):
        tree.insert("image.tag", "x")

    assert tree.to_dict() == {"image": "plain"}


@pytest.mark.parametrize("key", ["", ".a", "a.", "a..b"])
def test_insert_invalid_key(key):
    """Test that empty key segments are rejected."""
    with pytest.raises(MalformedSpecError):
        ValueTree().insert(key, "x")


def test_get():
    """Test reading values and subtrees back."""
    tree = ValueTree()
    tree.insert("a.b", "x")
    assert tree.get("a.b") == "x"
    assert tree.get("a") == {"b": "x"}

    with pytest.raises(KeyError):
        tree.get("a.c")
    with pytest.raises(KeyError):
        tree.get("a.b.c")


def test_insertion_order_preserved():
    """Test that keys keep the order they were inserted in."""
    tree = ValueTree()
    for key in ["z", "a", "m.b", "m.a"]:
        tree.insert(key, key)
    assert list(tree.to_dict()) == ["z", "a", "m"]
    assert list(tree.to_dict()["m"]) == ["b", "a"]
