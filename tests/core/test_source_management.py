"""Tests for source-list management on Composite and SourceList."""

import pytest

from multisource import Composite, SourceList, UnknownSourceError


class TestAddSource:
    """Tests for Composite.add_source()."""

    def test_append_by_default(self, source_a, source_b):
        composite = Composite([source_a])

        assert composite.add_source(source_b) is True
        assert composite.immediate_sources() == [source_a, source_b]

    def test_put_upfront(self, source_a, source_b):
        composite = Composite([source_a])

        composite.add_source(source_b, put_upfront=True)

        assert composite.immediate_sources()[0] is source_b

    def test_same_object_twice_rejected(self, source_a):
        composite = Composite()

        assert composite.add_source(source_a) is True
        assert composite.add_source(source_a) is False
        assert len(composite.immediate_sources()) == 1

    def test_equal_but_distinct_objects_accepted(self):
        """Membership is identity based, not equality based."""
        composite = Composite()

        assert composite.add_source({"x": 1}) is True
        assert composite.add_source({"x": 1}) is True
        assert len(composite.immediate_sources()) == 2


class TestRemoveSource:
    """Tests for Composite.remove_source()."""

    def test_remove_present(self, composite, source_a):
        assert composite.remove_source(source_a) is True
        assert composite.is_source_in_hierarchy(source_a) is False

    def test_remove_absent_silent(self, composite):
        assert composite.remove_source({"foo": "A.foo", "a": 1}) is False

    def test_remove_absent_not_silent(self, composite):
        stranger = {}

        with pytest.raises(UnknownSourceError) as exc_info:
            composite.remove_source(stranger, silent=False)

        assert exc_info.value.source is stranger
        assert isinstance(exc_info.value, LookupError)

    def test_removal_changes_resolution(self, composite, source_b):
        composite.remove_source(source_b)

        assert composite.get("foo") == "A.foo"
        assert composite.has("b") is False


class TestHierarchyQueries:
    """Tests for is_source_in_hierarchy() and the safe-add helpers."""

    def test_membership_is_one_level(self, source_a):
        inner = Composite([source_a])
        outer = Composite([inner])

        assert outer.is_source_in_hierarchy(inner) is True
        assert outer.is_source_in_hierarchy(source_a) is False

    def test_safe_when_no_conflict(self, composite):
        assert composite.can_source_be_safely_added({"c": 3}) is True

    def test_unsafe_when_name_conflicts(self, composite):
        assert composite.can_source_be_safely_added({"a": 100}) is False

    def test_unsafe_when_conflicting_with_own_key(self, composite):
        composite.add_property("mine", 1)

        assert composite.can_source_be_safely_added({"mine": 2}) is False

    def test_unsafe_when_already_present(self, source_a):
        composite = Composite([source_a])

        assert composite.can_source_be_safely_added(source_a) is False

    def test_add_if_safe(self, composite):
        safe = {"c": 3}
        unsafe = {"b": 4}

        assert composite.add_source_if_safe(safe) is True
        assert composite.add_source_if_safe(unsafe) is False
        assert composite.immediate_sources()[-1] is safe

    def test_safe_check_uses_object_own_attributes(self, walker, swimmer):
        composite = Composite([walker])

        # both define an instance attribute "legs"
        assert composite.can_source_be_safely_added(swimmer) is False


class TestSourceList:
    """Tests for the SourceList manager itself."""

    def test_adopts_caller_list(self):
        backing = [{"x": 1}]
        sources = SourceList(backing)

        sources.add({"y": 2})

        assert sources.items is backing
        assert len(backing) == 2

    def test_index_of(self, source_a, source_b):
        sources = SourceList([source_a, source_b])

        assert sources.index_of(source_b) == 1
        assert sources.index_of({}) == -1

    def test_remove_first_identity_match_only(self, source_a):
        sources = SourceList()
        sources.add(source_a)
        # bypass the manager to force a duplicate
        sources.items.append(source_a)

        sources.remove(source_a)

        assert sources.items == [source_a]

    def test_constructor_does_not_deduplicate(self, source_a):
        sources = SourceList([source_a, source_a])

        assert len(sources) == 2
        assert Composite([source_a, source_a]).keys() == ["foo", "a", "foo", "a"]

    def test_iteration(self, source_a, source_b):
        sources = SourceList([source_a, source_b])

        assert list(sources) == [source_a, source_b]
        assert len(sources) == 2
