"""Budget list and budget allocation shaping."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present, first_truthy, number_field, require_records
from campfire_insights.numeric import round_amount, round_groups

logger = structlog.get_logger(__name__)

LINEAGE_DELIMITER = ">"


def _budget_header(b: Any) -> dict[str, Any]:
    """Fields shared by a budget list entry and a budget detail."""
    return {
        "id": first_present(b, "id"),
        "name": first_present(b, "name"),
        "description": first_truthy(b, "description"),
        "entityId": first_present(b, "entity"),
        "entityName": first_truthy(b, "entity_name"),
        "departmentId": first_present(b, "department"),
        "departmentName": first_truthy(b, "department_name"),
        "cadence": str(first_truthy(b, "cadence", default="unspecified")),
        "startDate": first_present(b, "start_date"),
        "endDate": first_truthy(b, "end_date"),
        "periods": first_present(b, "periods"),
        "breakdownType": first_truthy(b, "breakdown_type"),
        "currency": first_truthy(b, "currency"),
    }


def _tag_names(tags: Any) -> list[Any]:
    if not isinstance(tags, list):
        return []
    return [
        first_truthy(t, "name", default=t) if isinstance(t, Mapping) else t for t in tags
    ]


@dataclass
class BudgetListSummary:
    """Budgets counted by cadence."""

    total_budgets: int
    by_cadence: dict[str, int] = field(default_factory=dict)
    budgets: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBudgets": self.total_budgets,
            "byCadence": self.by_cadence,
            "budgets": self.budgets,
        }


def shape_budgets(budgets: list[Any]) -> BudgetListSummary:
    require_records(budgets, "shape_budgets")

    by_cadence: dict[str, int] = {}
    shaped: list[dict[str, Any]] = []

    for b in budgets:
        item = _budget_header(b)
        by_cadence[item["cadence"]] = by_cadence.get(item["cadence"], 0) + 1
        item["tags"] = _tag_names(first_present(b, "tags"))
        shaped.append(item)

    logger.debug("budgets_shaped", count=len(shaped))
    return BudgetListSummary(total_budgets=len(budgets), by_cadence=by_cadence, budgets=shaped)


def lineage_group(allocation: Any) -> str:
    """Top-level chart-of-accounts segment of an allocation's lineage.

    ``"Expenses > Payroll > Salaries"`` groups under ``"Expenses"``. Without
    a lineage the account name is used, then ``"Unknown"``.
    """
    lineage = str(first_truthy(allocation, "account_lineage", default=""))
    head = lineage.split(LINEAGE_DELIMITER)[0].strip()
    return head or str(first_truthy(allocation, "account_name", default="Unknown"))


@dataclass
class BudgetDetailSummary:
    """One budget with its allocations grouped by account type and department."""

    header: dict[str, Any]
    total_budgeted: float
    allocation_count: int
    by_account_type: dict[str, dict[str, Any]] = field(default_factory=dict)
    by_department: dict[str, dict[str, Any]] = field(default_factory=dict)
    allocations: list[dict[str, Any]] = field(default_factory=list)

    @property
    def id(self) -> Any:
        return self.header.get("id")

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.header,
            "totalBudgeted": self.total_budgeted,
            "allocationCount": self.allocation_count,
            "byAccountType": self.by_account_type,
            "byDepartment": self.by_department,
            "allocations": self.allocations,
        }


def shape_budget_detail(budget: Any, allocations: list[Any]) -> BudgetDetailSummary:
    """Shape a budget and total its allocations.

    Args:
        budget: The budget record.
        allocations: Per-account allocation records for that budget.

    Returns:
        BudgetDetailSummary grouped by top-level lineage segment and by
        department (``"Unassigned"`` when none).
    """
    require_records(allocations, "shape_budget_detail")

    total_budgeted = 0.0
    by_account_type: dict[str, dict[str, Any]] = {}
    by_department: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for a in allocations:
        amount = number_field(a, "amount")
        total_budgeted += amount

        account_type = lineage_group(a)
        group = by_account_type.setdefault(account_type, {"count": 0, "total": 0.0})
        group["count"] += 1
        group["total"] += amount

        department = str(first_truthy(a, "department_name", default="Unassigned"))
        group = by_department.setdefault(department, {"count": 0, "total": 0.0})
        group["count"] += 1
        group["total"] += amount

        shaped.append(
            {
                "id": first_present(a, "id"),
                "accountId": first_present(a, "account"),
                "accountName": first_present(a, "account_name"),
                "accountLineage": first_truthy(a, "account_lineage", default=""),
                "departmentId": first_present(a, "department"),
                "departmentName": first_truthy(a, "department_name"),
                "period": first_present(a, "period"),
                "amount": amount,
            }
        )

    round_groups(by_account_type, "total")
    round_groups(by_department, "total")
    logger.debug(
        "budget_detail_shaped",
        budget_id=first_present(budget, "id"),
        allocations=len(shaped),
    )

    return BudgetDetailSummary(
        header=_budget_header(budget),
        total_budgeted=round_amount(total_budgeted),
        allocation_count=len(allocations),
        by_account_type=by_account_type,
        by_department=by_department,
        allocations=shaped,
    )
