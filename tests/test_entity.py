"""
Tests for the Entity core component.
"""

import threading

import pytest

from quiz_proto.core.behavior import BehaviorSet
from quiz_proto.core.entity import Entity


def _bump(receiver):
    receiver.count += 1


@pytest.fixture
def counter_kind():
    return BehaviorSet("counter", {"bump": _bump})


class TestEntity:
    """Tests for Entity fields and kind linkage."""

    def test_fields_as_attributes(self, counter_kind):
        """Fields read and write as attributes."""
        entity = Entity(counter_kind, {"count": 1})
        assert entity.count == 1
        entity.count = 5
        assert entity.count == 5
        assert entity.as_dict() == {"count": 5}

    def test_new_field(self, counter_kind):
        """Assigning an unknown name adds a field."""
        entity = Entity(counter_kind)
        entity.label = "x"
        assert entity.has_own("label")

    def test_unknown_attribute(self, counter_kind):
        """Neither field nor operation raises AttributeError."""
        entity = Entity(counter_kind)
        with pytest.raises(AttributeError):
            entity.nothing

    def test_reserved_names_protected(self, counter_kind):
        """Entity machinery cannot be overwritten through field assignment."""
        entity = Entity(counter_kind)
        with pytest.raises(AttributeError):
            entity.kind = None
        with pytest.raises(AttributeError):
            entity._fields = {}

    def test_delete_field(self, counter_kind):
        """Fields can be removed."""
        entity = Entity(counter_kind, {"count": 1})
        del entity.count
        assert not entity.has_own("count")
        with pytest.raises(AttributeError):
            del entity.count

    def test_kind_shared_not_copied(self, counter_kind):
        """Entities of a kind hold the same BehaviorSet object."""
        a = Entity(counter_kind, {"count": 0})
        b = Entity(counter_kind, {"count": 0})
        assert a.kind is b.kind is counter_kind

    def test_has_own_excludes_inherited(self, counter_kind):
        """Kind operations are not own; defined overrides are."""
        entity = Entity(counter_kind, {"count": 0})
        assert entity.has_own("count")
        assert not entity.has_own("bump")
        entity.define("bump", _bump)
        assert entity.has_own("bump")

    def test_bound_operation_access(self, counter_kind):
        """entity.bump() runs the kind's operation on the entity."""
        entity = Entity(counter_kind, {"count": 2})
        entity.bump()
        assert entity.count == 3

    def test_set_kind_keeps_fields(self, counter_kind):
        """Relinking changes behavior, not data."""
        other = BehaviorSet("other")
        entity = Entity(counter_kind, {"count": 2})
        entity.set_kind(other)
        assert entity.kind is other
        assert entity.count == 2
        with pytest.raises(AttributeError):
            entity.bump

    def test_define_requires_callable(self, counter_kind):
        """Overrides must be callable."""
        entity = Entity(counter_kind)
        with pytest.raises(TypeError):
            entity.define("bump", 3)

    def test_undefine_restores_kind(self, counter_kind):
        """Removing an override lets the kind answer again."""
        entity = Entity(counter_kind, {"count": 0})
        entity.define("bump", lambda e: None)
        entity.bump()
        assert entity.count == 0
        entity.undefine("bump")
        entity.bump()
        assert entity.count == 1

    def test_undefine_without_override(self, counter_kind):
        """Removing an override that was never defined raises AttributeError."""
        entity = Entity(counter_kind)
        with pytest.raises(AttributeError):
            entity.undefine("bump")

    def test_assigned_callable_is_own_operation(self, counter_kind):
        """A callable assigned as an attribute is stored as an operation."""
        entity = Entity(counter_kind, {"count": 0})
        entity.bump = lambda e: None
        assert "bump" in entity.own_operations
        assert "bump" not in entity.as_dict()
        entity.bump()
        assert entity.count == 0
        del entity.bump
        entity.bump()
        assert entity.count == 1

    def test_callable_in_initial_fields(self, counter_kind):
        """Callables passed at construction become own operations."""
        entity = Entity(counter_kind, {"count": 0, "bump": lambda e: None})
        assert entity.as_dict() == {"count": 0}
        assert entity.has_own("bump")

    def test_lock_is_reentrant(self, counter_kind):
        """The entity lock can be taken twice by one thread."""
        entity = Entity(counter_kind)
        with entity.lock:
            with entity.lock:
                pass

    def test_concurrent_bumps_not_lost(self, counter_kind):
        """Concurrent invocations on one entity do not lose updates."""
        entity = Entity(counter_kind, {"count": 0})

        def worker():
            for _ in range(500):
                entity.bump()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert entity.count == 2000

    def test_repr(self, counter_kind):
        """Repr names the kind and fields."""
        entity = Entity(counter_kind, {"count": 1})
        assert repr(entity) == "Entity(kind=counter, count=1)"
