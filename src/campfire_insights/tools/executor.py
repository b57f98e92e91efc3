"""Tool executor that routes named operations to the shapers and composers.

The caller fetches raw Campfire responses and passes them in as keyword
arguments; the executor unwraps paged list responses, runs the matching
core function and wraps its summary in a success/error envelope.
"""

import json
from datetime import date, datetime
from typing import Any

import structlog

from campfire_insights.config import get_settings
from campfire_insights.dates import snapshot_periods
from campfire_insights.fields import extract_items
from campfire_insights.shapers import (
    analyze_aging,
    analyze_contracts,
    bills_to_aging_rows,
    enrich_transactions,
    invoices_to_aging_rows,
    shape_bills,
    shape_budget_detail,
    shape_budgets,
    shape_customers,
    shape_departments,
    shape_invoices,
    shape_trial_balance,
    shape_uncategorized_transactions,
)
from campfire_insights.statements import build_financial_snapshot, compute_burn_rate

logger = structlog.get_logger(__name__)


class ToolExecutionError(Exception):
    """Error during tool execution."""

    def __init__(self, tool_name: str, message: str, details: Any = None):
        super().__init__(f"Tool '{tool_name}' failed: {message}")
        self.tool_name = tool_name
        self.details = details


class ShapingExecutor:
    """Executes named operations against already-fetched payloads."""

    def __init__(self) -> None:
        self._tool_handlers: dict[str, Any] = {
            # Statements
            "get_financial_snapshot": self._financial_snapshot,
            "get_burn_rate": self._burn_rate,
            # Ledger
            "get_transactions": self._transactions,
            "get_uncategorized_transactions": self._uncategorized_transactions,
            "trial_balance": self._trial_balance,
            # Receivables / payables
            "get_aging": self._aging,
            "get_invoices": self._invoices,
            "get_bills": self._bills,
            # Revenue recognition
            "get_contracts": self._contracts,
            "get_customers": self._customers,
            # Budgets
            "get_budgets": self._budgets,
            "get_budget_details": self._budget_details,
            # Company objects
            "get_departments": self._departments,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._tool_handlers)

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Execute an operation and return the result envelope.

        Raises:
            ToolExecutionError: If ``tool_name`` is not a known operation.
        """
        handler = self._tool_handlers.get(tool_name)
        if not handler:
            raise ToolExecutionError(tool_name, f"Unknown tool: {tool_name}")

        logger.info("executing_tool", tool=tool_name, args=sorted(arguments))

        try:
            result = handler(**arguments)
            logger.info("tool_executed", tool=tool_name, success=True)
            return {"success": True, "result": result}
        except Exception as e:
            logger.exception("tool_execution_error", tool=tool_name)
            return {"success": False, "error": f"Error in {tool_name}: {e}"}

    def render(self, envelope: dict[str, Any]) -> str:
        """Render an envelope as text: indented JSON on success, the message on error."""
        if not envelope.get("success"):
            return str(envelope.get("error", ""))
        return json.dumps(envelope["result"], indent=get_settings().json_indent)

    # === Statement Handlers ===

    def _financial_snapshot(
        self,
        month_income: Any,
        month_balance: Any,
        month_cash_flow: Any = None,
        ytd_income: Any = None,
        ytd_balance: Any = None,
        as_of: str | None = None,
    ) -> dict[str, Any]:
        now = date.fromisoformat(as_of) if as_of else datetime.now()
        month_period, ytd_period = snapshot_periods(now)
        current_month = build_financial_snapshot(
            month_income, month_balance, month_cash_flow, month_period.label
        )
        ytd = build_financial_snapshot(ytd_income, ytd_balance, None, ytd_period.label)
        return {"currentMonth": current_month.to_dict(), "ytd": ytd.to_dict()}

    def _burn_rate(
        self, monthly_statements: list[dict[str, Any]], balance_sheet: Any = None
    ) -> dict[str, Any]:
        return compute_burn_rate(monthly_statements, balance_sheet).to_dict()

    # === Ledger Handlers ===

    def _transactions(self, transactions: Any) -> dict[str, Any]:
        return enrich_transactions(extract_items(transactions)).to_dict()

    def _uncategorized_transactions(self, transactions: Any) -> dict[str, Any]:
        return shape_uncategorized_transactions(extract_items(transactions)).to_dict()

    def _trial_balance(self, report: Any) -> dict[str, Any]:
        return shape_trial_balance(report).to_dict()

    # === Receivable / Payable Handlers ===

    def _aging(
        self,
        aging: Any = None,
        bills: Any = None,
        invoices: Any = None,
        aging_type: str | None = None,
    ) -> dict[str, Any]:
        if bills is not None:
            rows = bills_to_aging_rows(extract_items(bills))
            aging_type = aging_type or "ap"
        elif invoices is not None:
            rows = invoices_to_aging_rows(extract_items(invoices))
            aging_type = aging_type or "ar"
        else:
            rows = extract_items(aging)
        return analyze_aging(rows, aging_type).to_dict()

    def _invoices(self, invoices: Any) -> dict[str, Any]:
        return shape_invoices(extract_items(invoices)).to_dict()

    def _bills(self, bills: Any) -> dict[str, Any]:
        return shape_bills(extract_items(bills)).to_dict()

    # === Revenue Recognition Handlers ===

    def _contracts(self, contracts: Any) -> dict[str, Any]:
        return analyze_contracts(extract_items(contracts)).to_dict()

    def _customers(self, customers: Any) -> dict[str, Any]:
        return shape_customers(extract_items(customers)).to_dict()

    # === Budget Handlers ===

    def _budgets(self, budgets: Any) -> dict[str, Any]:
        return shape_budgets(extract_items(budgets)).to_dict()

    def _budget_details(self, budget: Any, allocations: Any) -> dict[str, Any]:
        return shape_budget_detail(budget, extract_items(allocations)).to_dict()

    # === Company Object Handlers ===

    def _departments(self, departments: Any) -> dict[str, Any]:
        return shape_departments(extract_items(departments)).to_dict()
