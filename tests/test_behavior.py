"""
Tests for the BehaviorSet core component.
"""

import pytest

from quiz_proto.core.behavior import BehaviorSet
from quiz_proto.core.errors import CyclicExtension


def _noop(receiver):
    return None


def _greet(receiver):
    return "hello"


class TestBehaviorSet:
    """Tests for BehaviorSet construction and lookup."""

    def test_own_operation_found(self):
        """A set finds its own operations."""
        base = BehaviorSet("base", {"greet": _greet})
        assert base.find("greet") is _greet
        assert "greet" in base

    def test_missing_returns_none(self):
        """Unknown names are not found."""
        base = BehaviorSet("base", {"greet": _greet})
        assert base.find("nothing") is None
        assert "nothing" not in base

    def test_operations_are_read_only(self):
        """The operation mapping cannot be mutated."""
        base = BehaviorSet("base", {"greet": _greet})
        with pytest.raises(TypeError):
            base.operations["other"] = _noop

    def test_source_mapping_copied(self):
        """Changing the dict used to build a set does not change the set."""
        ops = {"greet": _greet}
        base = BehaviorSet("base", ops)
        ops["noop"] = _noop
        assert "noop" not in base

    def test_non_callable_rejected(self):
        """Operations must be callable."""
        with pytest.raises(TypeError):
            BehaviorSet("base", {"greet": "hello"})

    def test_child_falls_back_to_parent(self):
        """Lookups walk up the extension chain."""
        base = BehaviorSet("base", {"greet": _greet})
        child = base.extend("child", {"noop": _noop})
        assert child.find("greet") is _greet
        assert child.find("noop") is _noop
        assert base.find("noop") is None

    def test_child_overrides_parent(self):
        """The nearest level wins."""
        base = BehaviorSet("base", {"greet": _greet})
        child = base.extend("child", {"greet": _noop})
        assert child.find("greet") is _noop
        assert child.defining_level("greet") is child

    def test_lineage_order(self):
        """Lineage lists self first, then ancestors."""
        a = BehaviorSet("a")
        b = a.extend("b")
        c = b.extend("c")
        assert [level.name for level in c.lineage()] == ["c", "b", "a"]

    def test_operation_names_include_inherited(self):
        """Visible names cover the whole chain."""
        base = BehaviorSet("base", {"greet": _greet})
        child = base.extend("child", {"noop": _noop})
        assert child.operation_names() == ["greet", "noop"]

    def test_is_a(self):
        """is_a follows ancestry, not the other way round."""
        base = BehaviorSet("base")
        child = base.extend("child")
        assert child.is_a(base)
        assert child.is_a(child)
        assert not base.is_a(child)

    def test_parent_shared_by_many_children(self):
        """One parent may be extended by several children."""
        base = BehaviorSet("base", {"greet": _greet})
        left = base.extend("left")
        right = base.extend("right")
        assert left.extends is right.extends is base


class TestCyclicExtension:
    """Tests for cycle rejection."""

    def test_extending_same_name_rejected(self):
        """A set may not extend a kind with its own name."""
        base = BehaviorSet("user")
        with pytest.raises(CyclicExtension):
            base.extend("user")

    def test_transitive_cycle_rejected(self):
        """A name reappearing further up the chain is a cycle."""
        user = BehaviorSet("user")
        paid = user.extend("paid_user")
        with pytest.raises(CyclicExtension) as excinfo:
            paid.extend("user")
        assert excinfo.value.chain == ["user", "paid_user", "user"]
