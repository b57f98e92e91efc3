"""Financial statement search and derived metrics.

Statement responses have no fixed schema. They arrive either as lists of
rows (each possibly holding child rows) or as objects keyed by section name.
``extract_total`` walks both forms looking for a labelled line item, and the
snapshot and burn-rate composers build their metrics on top of it.

A line item whose value is zero cannot be told apart from a missing one:
both come back as 0, and downstream fallbacks treat them alike.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

import structlog

from campfire_insights.numeric import Number, is_truthy, round_amount, to_number

logger = structlog.get_logger(__name__)

REVENUE_KEYWORDS = ("revenue", "income", "sales")
COGS_KEYWORDS = ("cost of goods", "cost of sales", "cogs", "cost of revenue")
EXPENSE_KEYWORDS = ("expense", "operating expense", "total expense")
NET_INCOME_KEYWORDS = ("net income", "net profit", "net earnings")
CASH_KEYWORDS = ("cash", "cash and cash equivalents", "bank")
CURRENT_ASSETS_KEYWORDS = ("current assets", "total current assets")
CURRENT_LIABILITIES_KEYWORDS = ("current liabilities", "total current liabilities")

# Row fields, in precedence order
LABEL_KEYS = ("name", "label", "title", "account_name")
ROW_VALUE_KEYS = ("total", "amount", "value", "balance")
CHILD_KEYS = ("children", "rows", "items", "line_items")
SECTION_ROW_KEYS = ("amount", "total", "value")

Trend = Literal["increasing", "decreasing", "stable"]


def _first_truthy(row: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if is_truthy(value):
            return value
    return None


def _matches(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _is_plain_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _search_rows(rows: list[Any], keywords: Sequence[str]) -> Number:
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        label = str(_first_truthy(row, LABEL_KEYS) or "").lower()
        if _matches(label, keywords):
            # First labelled match wins, even when its value is zero
            return to_number(_first_truthy(row, ROW_VALUE_KEYS))
        nested = _first_truthy(row, CHILD_KEYS)
        if nested is not None:
            found = extract_total(nested, keywords)
            if found != 0:
                return found
    return 0


def _search_sections(sections: Mapping[str, Any], keywords: Sequence[str]) -> Number:
    for key, value in sections.items():
        if _matches(str(key).lower(), keywords):
            if _is_plain_number(value):
                return value
            if isinstance(value, Mapping) and "total" in value:
                return to_number(value["total"])
            if isinstance(value, Mapping) and "amount" in value:
                return to_number(value["amount"])
            if isinstance(value, list):
                # A matched section holding rows is summed, not first-matched
                return sum(
                    to_number(_first_truthy(r, SECTION_ROW_KEYS))
                    if isinstance(r, Mapping)
                    else 0
                    for r in value
                )
        if isinstance(value, (Mapping, list)):
            found = extract_total(value, keywords)
            if found != 0:
                return found
    return 0


def extract_total(data: Any, keywords: Sequence[str]) -> Number:
    """Find the total of the first line item or section matching ``keywords``.

    Args:
        data: Statement tree: a list of rows or an object of sections, nested
            to any depth. ``None`` and scalars yield 0.
        keywords: Lowercase fragments tested by substring against row labels
            and section keys.

    Returns:
        The matched value, or 0 when nothing matches at any depth.
    """
    if isinstance(data, list):
        return _search_rows(data, keywords)
    if isinstance(data, Mapping):
        return _search_sections(data, keywords)
    return 0


# --- Financial snapshot ---


@dataclass
class FinancialSnapshot:
    """Key metrics derived from one income statement and balance sheet."""

    period: str
    revenue: Number
    expenses: Number
    net_income: Number
    gross_margin_percent: float | None
    net_margin_percent: float | None
    cash_position: Number | None
    current_ratio: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "revenue": self.revenue,
            "expenses": self.expenses,
            "netIncome": self.net_income,
            "grossMarginPercent": self.gross_margin_percent,
            "netMarginPercent": self.net_margin_percent,
            "cashPosition": self.cash_position,
            "currentRatio": self.current_ratio,
        }


def build_financial_snapshot(
    income_statement: Any,
    balance_sheet: Any,
    cash_flow: Any,
    period_label: str,
) -> FinancialSnapshot:
    """Build a financial snapshot from raw statement responses.

    ``cash_flow`` is accepted for symmetry with the statement triple but is
    not read yet. Net income falls back to revenue minus expenses when no
    net income line is found. Zero cash is reported as unknown (``None``).
    """
    revenue = extract_total(income_statement, REVENUE_KEYWORDS)
    cogs = extract_total(income_statement, COGS_KEYWORDS)
    expenses = extract_total(income_statement, EXPENSE_KEYWORDS)
    net_income = extract_total(income_statement, NET_INCOME_KEYWORDS)

    computed_net = net_income if net_income != 0 else revenue - expenses

    gross_profit = revenue - abs(cogs)
    gross_margin = round_amount(gross_profit / revenue * 100) if revenue != 0 else None
    net_margin = round_amount(computed_net / revenue * 100) if revenue != 0 else None

    cash = extract_total(balance_sheet, CASH_KEYWORDS)
    current_assets = extract_total(balance_sheet, CURRENT_ASSETS_KEYWORDS)
    current_liabilities = extract_total(balance_sheet, CURRENT_LIABILITIES_KEYWORDS)
    current_ratio = (
        round_amount(current_assets / current_liabilities)
        if current_liabilities != 0
        else None
    )

    logger.debug(
        "financial_snapshot_built",
        period=period_label,
        revenue=revenue,
        net_income_found=net_income != 0,
    )

    return FinancialSnapshot(
        period=period_label,
        revenue=revenue,
        expenses=abs(expenses),
        net_income=computed_net,
        gross_margin_percent=gross_margin,
        net_margin_percent=net_margin,
        cash_position=cash or None,
        current_ratio=current_ratio,
    )


# --- Burn rate ---


@dataclass
class MonthlyStatement:
    """One month's income statement, labelled for display."""

    label: str
    data: Any


@dataclass
class BurnRateResult:
    """Average monthly burn, its trend, and the implied runway."""

    monthly_burn_avg: float
    trend: Trend
    cash_position: Number | None
    runway_months: float | None
    monthly_burns: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "monthlyBurnAvg": self.monthly_burn_avg,
            "monthlyBurns": [dict(b) for b in self.monthly_burns],
            "trend": self.trend,
            "cashPosition": self.cash_position,
            "runwayMonths": self.runway_months,
        }


def _mean(values: Sequence[Number]) -> float:
    return sum(values) / len(values)


def classify_trend(burns: Sequence[Number], average: float) -> Trend:
    """Compare the second half of ``burns`` to the first half.

    A shift of more than 10% of ``average`` either way is a trend; fewer
    than three months is always stable.
    """
    if len(burns) < 3:
        return "stable"
    mid = len(burns) // 2
    diff = _mean(burns[mid:]) - _mean(burns[:mid])
    if diff > average * 0.1:
        return "increasing"
    if diff < -average * 0.1:
        return "decreasing"
    return "stable"


def compute_burn_rate(
    monthly_statements: Sequence[MonthlyStatement | Mapping[str, Any]],
    balance_sheet: Any,
) -> BurnRateResult:
    """Compute burn rate from consecutive monthly income statements.

    Args:
        monthly_statements: Oldest first. Each is a ``MonthlyStatement`` or a
            mapping with ``label`` and ``data`` keys.
        balance_sheet: Latest balance sheet, used for the cash position.

    Returns:
        BurnRateResult where a positive burn means cash is being spent down.
    """
    monthly_burns: list[dict[str, Any]] = []
    for statement in monthly_statements:
        if isinstance(statement, Mapping):
            label, data = statement.get("label"), statement.get("data")
        else:
            label, data = statement.label, statement.data
        revenue = extract_total(data, REVENUE_KEYWORDS)
        expenses = abs(extract_total(data, EXPENSE_KEYWORDS))
        monthly_burns.append({"month": label, "burn": expenses - revenue})

    burns = [b["burn"] for b in monthly_burns]
    average = round_amount(_mean(burns)) if burns else 0.0
    trend = classify_trend(burns, average)

    cash = extract_total(balance_sheet, CASH_KEYWORDS)
    runway = round_amount(cash / average) if average > 0 and cash > 0 else None

    logger.debug(
        "burn_rate_computed",
        months=len(burns),
        average=average,
        trend=trend,
    )

    return BurnRateResult(
        monthly_burn_avg=average,
        trend=trend,
        cash_position=cash or None,
        runway_months=runway,
        monthly_burns=monthly_burns,
    )
