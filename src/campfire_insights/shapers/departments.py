"""Department list shaping."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present, require_records
from campfire_insights.numeric import to_flag

logger = structlog.get_logger(__name__)


@dataclass
class DepartmentSummary:
    """Flat department list with parent and entity references resolved."""

    total_departments: int
    active_departments: int
    top_level_departments: int
    departments: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDepartments": self.total_departments,
            "activeDepartments": self.active_departments,
            "topLevelDepartments": self.top_level_departments,
            "departments": self.departments,
        }


def shape_departments(departments: list[Any]) -> DepartmentSummary:
    """Shape departments, naming each parent from the same list when needed.

    A department without an active flag counts as inactive. String flags
    such as ``"false"`` or ``"1"`` are parsed rather than tested for
    emptiness.
    """
    require_records(departments, "shape_departments")

    names_by_id = {
        first_present(d, "id"): first_present(d, "name")
        for d in departments
        if isinstance(first_present(d, "id"), (str, int))
    }

    active = 0
    top_level = 0
    shaped: list[dict[str, Any]] = []

    for d in departments:
        is_active = to_flag(first_present(d, "is_active", "isActive", "active"))
        parent_id = first_present(d, "parent", "parent_id", "parentId")
        parent_name = first_present(d, "parent_name", "parentName")
        if isinstance(parent_id, Mapping):
            # Expanded parent object
            parent_name = parent_name or first_present(parent_id, "name")
            parent_id = first_present(parent_id, "id")
        if parent_name is None and isinstance(parent_id, (str, int)):
            parent_name = names_by_id.get(parent_id)

        if is_active:
            active += 1
        if parent_id is None:
            top_level += 1

        shaped.append(
            {
                "id": first_present(d, "id"),
                "name": first_present(d, "name"),
                "number": first_present(d, "number", "department_number"),
                "isActive": is_active,
                "parentId": parent_id,
                "parentName": parent_name,
                "entityId": first_present(d, "entity", "entity_id", "entityId"),
                "entityName": first_present(d, "entity_name", "entityName"),
            }
        )

    logger.debug("departments_shaped", count=len(shaped), active=active)

    return DepartmentSummary(
        total_departments=len(departments),
        active_departments=active,
        top_level_departments=top_level,
        departments=shaped,
    )
