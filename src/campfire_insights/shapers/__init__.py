"""Entity shapers: raw Campfire records in, stable summaries out."""

from campfire_insights.shapers.aging import (
    AgingSummary,
    analyze_aging,
    bills_to_aging_rows,
    categorize_days,
    invoices_to_aging_rows,
)
from campfire_insights.shapers.budgets import (
    BudgetDetailSummary,
    BudgetListSummary,
    lineage_group,
    shape_budget_detail,
    shape_budgets,
)
from campfire_insights.shapers.contracts import (
    ContractSummary,
    CustomerSummary,
    analyze_contracts,
    shape_customers,
)
from campfire_insights.shapers.departments import DepartmentSummary, shape_departments
from campfire_insights.shapers.documents import (
    BillSummary,
    InvoiceSummary,
    shape_bills,
    shape_invoices,
)
from campfire_insights.shapers.transactions import (
    TransactionSummary,
    UncategorizedSummary,
    enrich_transactions,
    shape_uncategorized_transactions,
)
from campfire_insights.shapers.trial_balance import TrialBalanceSummary, shape_trial_balance

__all__ = [
    # Ledger
    "TransactionSummary",
    "UncategorizedSummary",
    "TrialBalanceSummary",
    "enrich_transactions",
    "shape_uncategorized_transactions",
    "shape_trial_balance",
    # Aging
    "AgingSummary",
    "analyze_aging",
    "bills_to_aging_rows",
    "categorize_days",
    "invoices_to_aging_rows",
    # Revenue
    "ContractSummary",
    "CustomerSummary",
    "analyze_contracts",
    "shape_customers",
    # Documents
    "BillSummary",
    "InvoiceSummary",
    "shape_bills",
    "shape_invoices",
    # Budgets
    "BudgetDetailSummary",
    "BudgetListSummary",
    "lineage_group",
    "shape_budget_detail",
    "shape_budgets",
    # Departments
    "DepartmentSummary",
    "shape_departments",
]
