"""
Unit tests for DepartmentHierarchy.
"""

import pytest

from taskboard.domain.models.department import Department
from taskboard.domain.services.department_hierarchy import DepartmentHierarchy


def dept(dept_id, parent_id=None, active=True):
    return Department(id=dept_id, name=dept_id.title(), parent_id=parent_id, is_active=active)


@pytest.fixture
def hierarchy():
    return DepartmentHierarchy([
        dept("root"),
        dept("eng", "root"),
        dept("backend", "eng"),
        dept("frontend", "eng"),
        dept("legacy", "eng", active=False),
        dept("legacy-team", "legacy"),
        dept("sales", "root"),
        dept("other-root"),
    ])


class TestCollectSubtree:
    """Subtree collection."""

    def test_includes_root_and_active_descendants(self, hierarchy):
        assert hierarchy.collect_subtree("eng") == {"eng", "backend", "frontend"}

    def test_leaf(self, hierarchy):
        assert hierarchy.collect_subtree("backend") == {"backend"}

    def test_include_inactive(self, hierarchy):
        assert hierarchy.collect_subtree("eng", include_inactive=True) == {
            "eng", "backend", "frontend", "legacy", "legacy-team"
        }

    def test_unknown_root_is_empty(self, hierarchy):
        assert hierarchy.collect_subtree("missing") == set()
        assert hierarchy.collect_subtree(None) == set()

    def test_separate_roots_do_not_mix(self, hierarchy):
        assert "other-root" not in hierarchy.collect_subtree("root")

    def test_corrupt_cycle_terminates(self):
        looped = DepartmentHierarchy([dept("a", "b"), dept("b", "a")])
        assert looped.collect_subtree("a") == {"a", "b"}
        assert looped.is_descendant_or_self("a", "missing") is False


class TestDescendants:

    def test_self_is_descendant(self, hierarchy):
        assert hierarchy.is_descendant_or_self("eng", "eng") is True

    def test_grandchild(self, hierarchy):
        assert hierarchy.is_descendant_or_self("backend", "root") is True

    def test_sibling_is_not(self, hierarchy):
        assert hierarchy.is_descendant_or_self("sales", "eng") is False


class TestCycleGuard:
    """Moving a department under its own descendant must be refused."""

    def test_move_under_descendant(self, hierarchy):
        assert hierarchy.would_create_cycle("eng", "backend") is True

    def test_move_under_self(self, hierarchy):
        assert hierarchy.would_create_cycle("eng", "eng") is True

    def test_move_under_sibling(self, hierarchy):
        assert hierarchy.would_create_cycle("backend", "sales") is False

    def test_move_to_root(self, hierarchy):
        assert hierarchy.would_create_cycle("backend", None) is False


def test_active_children(hierarchy):
    assert sorted(hierarchy.active_children("eng")) == ["backend", "frontend"]
    assert hierarchy.active_children("backend") == []
