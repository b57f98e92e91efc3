"""Revenue recognition contracts and contract customers."""

from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present, first_truthy, number_field, require_records
from campfire_insights.numeric import is_truthy, round_amount, to_number

logger = structlog.get_logger(__name__)


@dataclass
class ContractSummary:
    """Recognized versus remaining revenue across contracts."""

    total_contracts: int
    total_revenue: float
    total_recognized: float
    total_remaining: float
    percent_recognized: float | None
    contracts: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalContracts": self.total_contracts,
            "totalRevenue": self.total_revenue,
            "totalRecognized": self.total_recognized,
            "totalRemaining": self.total_remaining,
            "percentRecognized": self.percent_recognized,
            "contracts": self.contracts,
        }


def analyze_contracts(contracts: list[Any]) -> ContractSummary:
    """Shape contracts with per-contract and portfolio recognition percentages.

    A contract with no revenue reports 0% recognized, while a portfolio with
    no revenue reports ``None``.
    """
    require_records(contracts, "analyze_contracts")

    total_revenue = 0.0
    total_billed = 0.0
    total_unbilled = 0.0
    shaped: list[dict[str, Any]] = []

    for c in contracts:
        revenue = number_field(c, "total_revenue", "totalRevenue", "contract_value", truthy=True)
        billed = number_field(
            c, "total_billed", "totalBilled", "recognized_revenue", truthy=True
        )
        unbilled_raw = first_truthy(c, "total_unbilled", "totalUnbilled")
        unbilled = to_number(unbilled_raw) if is_truthy(unbilled_raw) else revenue - billed
        total_revenue += revenue
        total_billed += billed
        total_unbilled += unbilled

        shaped.append(
            {
                "id": first_present(c, "id"),
                "name": first_truthy(c, "name", "contract_name"),
                "clientName": first_truthy(c, "client_name", "clientName"),
                "status": first_present(c, "status"),
                "totalRevenue": revenue,
                "recognized": billed,
                "remaining": unbilled,
                "percentRecognized": round_amount(billed / revenue * 100) if revenue > 0 else 0,
                "startDate": first_truthy(c, "start_date", "startDate"),
                "endDate": first_truthy(c, "end_date", "endDate"),
            }
        )

    logger.debug("contracts_analyzed", count=len(shaped))

    return ContractSummary(
        total_contracts=len(contracts),
        total_revenue=round_amount(total_revenue),
        total_recognized=round_amount(total_billed),
        total_remaining=round_amount(total_unbilled),
        percent_recognized=(
            round_amount(total_billed / total_revenue * 100) if total_revenue > 0 else None
        ),
        contracts=shaped,
    )


@dataclass
class CustomerSummary:
    """Revenue, MRR and outstanding balances summed across customers."""

    total_customers: int
    total_revenue: float
    total_mrr: float
    total_outstanding: float
    customers: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCustomers": self.total_customers,
            "totalRevenue": self.total_revenue,
            "totalMrr": self.total_mrr,
            "totalOutstanding": self.total_outstanding,
            "customers": self.customers,
        }


def shape_customers(customers: list[Any]) -> CustomerSummary:
    require_records(customers, "shape_customers")

    total_revenue = 0.0
    total_mrr = 0.0
    total_outstanding = 0.0
    shaped: list[dict[str, Any]] = []

    for c in customers:
        revenue = number_field(c, "total_revenue", "totalRevenue")
        mrr = number_field(c, "total_mrr", "totalMrr")
        outstanding = number_field(c, "total_outstanding", "totalOutstanding")
        total_revenue += revenue
        total_mrr += mrr
        total_outstanding += outstanding

        shaped.append(
            {
                "id": first_present(c, "id"),
                "name": first_present(c, "name"),
                "companyName": first_present(c, "company_name", "companyName"),
                "email": first_present(c, "email"),
                "phone": first_present(c, "phone_number", "phoneNumber"),
                "currency": first_present(c, "currency"),
                "activeContracts": number_field(c, "active_contracts", "activeContracts"),
                "completedContracts": number_field(
                    c, "completed_contracts", "completedContracts"
                ),
                "totalContracts": number_field(c, "total_contracts", "totalContracts"),
                "totalRevenue": revenue,
                "totalMrr": mrr,
                "totalBilled": number_field(c, "total_billed", "totalBilled"),
                "totalUnbilled": number_field(c, "total_unbilled", "totalUnbilled"),
                "totalPaid": number_field(c, "total_paid", "totalPaid"),
                "totalOutstanding": outstanding,
                "totalDeferredRevenue": number_field(
                    c, "total_deferred_revenue", "totalDeferredRevenue"
                ),
                "paymentTerms": first_present(
                    c, "payment_term_name_display", "paymentTermNameDisplay"
                ),
                "status": first_present(c, "status"),
            }
        )

    logger.debug("customers_shaped", count=len(shaped))

    return CustomerSummary(
        total_customers=len(customers),
        total_revenue=round_amount(total_revenue),
        total_mrr=round_amount(total_mrr),
        total_outstanding=round_amount(total_outstanding),
        customers=shaped,
    )
