"""Campfire Insights - normalization and aggregation of Campfire accounting data."""

__version__ = "0.1.0"

from campfire_insights.config import configure_logging, get_settings
from campfire_insights.dates import (
    DateRange,
    burn_rate_windows,
    current_month_range,
    current_ytd_range,
    month_range,
    snapshot_periods,
)
from campfire_insights.numeric import round_amount, to_number
from campfire_insights.shapers import (
    analyze_aging,
    analyze_contracts,
    enrich_transactions,
    shape_bills,
    shape_budget_detail,
    shape_budgets,
    shape_customers,
    shape_departments,
    shape_invoices,
    shape_trial_balance,
    shape_uncategorized_transactions,
)
from campfire_insights.statements import (
    BurnRateResult,
    FinancialSnapshot,
    build_financial_snapshot,
    compute_burn_rate,
    extract_total,
)
from campfire_insights.tools import ShapingExecutor, ToolExecutionError

__all__ = [
    # Version
    "__version__",
    # Numeric
    "round_amount",
    "to_number",
    # Dates
    "DateRange",
    "month_range",
    "current_ytd_range",
    "current_month_range",
    "snapshot_periods",
    "burn_rate_windows",
    # Statements
    "extract_total",
    "FinancialSnapshot",
    "build_financial_snapshot",
    "BurnRateResult",
    "compute_burn_rate",
    # Shapers
    "enrich_transactions",
    "analyze_aging",
    "analyze_contracts",
    "shape_customers",
    "shape_invoices",
    "shape_trial_balance",
    "shape_budgets",
    "shape_budget_detail",
    "shape_uncategorized_transactions",
    "shape_bills",
    "shape_departments",
    # Tools
    "ShapingExecutor",
    "ToolExecutionError",
    # Config
    "get_settings",
    "configure_logging",
]
