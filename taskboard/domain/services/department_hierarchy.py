"""
Department hierarchy resolver.
Answers scope questions over department parent pointers without any I/O.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from taskboard.domain.models.department import Department


logger = logging.getLogger(__name__)


class DepartmentHierarchy:
    """
    Read-only view over a department forest.

    Both walks are iterative and keep a visited set, so a corrupt parent chain
    terminates instead of looping.
    """

    def __init__(self, departments: Iterable[Department]):
        self._parents: Dict[str, Optional[str]] = {}
        self._children: Dict[str, List[str]] = {}
        self._active: Set[str] = set()

        for department in departments:
            self._parents[department.id] = department.parent_id
            if department.is_active:
                self._active.add(department.id)
            if department.parent_id is not None:
                self._children.setdefault(department.parent_id, []).append(department.id)

    def __contains__(self, department_id: str) -> bool:
        return department_id in self._parents

    def is_descendant_or_self(self, candidate_id: Optional[str], root_id: Optional[str]) -> bool:
        """True if walking up from candidate reaches root (or they are equal)."""
        if candidate_id is None or root_id is None:
            return False

        visited: Set[str] = set()
        current: Optional[str] = candidate_id

        while current is not None:
            if current == root_id:
                return True
            if current in visited:
                logger.warning(f"Cycle detected in department chain at {current}")
                return False
            visited.add(current)
            current = self._parents.get(current)

        return False

    def collect_subtree(self, root_id: Optional[str], include_inactive: bool = False) -> Set[str]:
        """
        Return root_id plus every department below it.
        Inactive descendants are skipped unless include_inactive is set.
        An unknown root yields an empty set.
        """
        if root_id is None or root_id not in self._parents:
            return set()

        result: Set[str] = {root_id}
        stack: List[str] = [root_id]

        while stack:
            current = stack.pop()
            for child_id in self._children.get(current, []):
                if child_id in result:
                    continue
                if not include_inactive and child_id not in self._active:
                    continue
                result.add(child_id)
                stack.append(child_id)

        return result

    def would_create_cycle(self, department_id: str, new_parent_id: Optional[str]) -> bool:
        """True if re-parenting department_id under new_parent_id makes it its own ancestor."""
        if new_parent_id is None:
            return False
        return self.is_descendant_or_self(new_parent_id, department_id)

    def active_children(self, department_id: str) -> List[str]:
        return [
            child_id for child_id in self._children.get(department_id, [])
            if child_id in self._active
        ]
