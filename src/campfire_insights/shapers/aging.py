"""AP/AR aging analysis.

Aging rows come either from a dedicated aging report or from unpaid bills
(payables) and unpaid invoices (receivables) mapped onto the same row
shape by ``bills_to_aging_rows`` / ``invoices_to_aging_rows``.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

import structlog

from campfire_insights.fields import first_present, first_truthy, number_field, require_records
from campfire_insights.numeric import Number, round_amount, round_groups, to_number

logger = structlog.get_logger(__name__)

AgingType = Literal["ap", "ar"]

CRITICAL_DAYS = 90


def categorize_days(days: Number) -> str:
    """Map days outstanding onto a fixed aging bucket."""
    if days <= 30:
        return "0-30"
    if days <= 60:
        return "31-60"
    if days <= 90:
        return "61-90"
    return "90+"


@dataclass
class AgingSummary:
    """Outstanding balances grouped by aging bucket."""

    type: str
    total_outstanding: float
    buckets: dict[str, dict[str, Any]] = field(default_factory=dict)
    critical_items: list[dict[str, Any]] = field(default_factory=list)
    items: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "totalOutstanding": self.total_outstanding,
            "buckets": self.buckets,
            "criticalItems": self.critical_items,
            "items": self.items,
        }


def analyze_aging(aging_data: list[Any], aging_type: AgingType | None = None) -> AgingSummary:
    """Bucket aging rows and flag the 90+ day items.

    An explicit bucket label on the row wins over one derived from days
    outstanding. A row is critical when it is at least 90 days old or its
    bucket label mentions 90.
    """
    require_records(aging_data, "analyze_aging")

    buckets: dict[str, dict[str, Any]] = {}
    critical_items: list[dict[str, Any]] = []
    total_outstanding = 0.0
    items: list[dict[str, Any]] = []

    for row in aging_data:
        amount = number_field(row, "amount", "balance", "outstanding", truthy=True)
        days = number_field(row, "days_outstanding", "days", truthy=True)
        bucket = str(
            first_truthy(row, "aging_bucket", "bucket", "age_bucket")
            or categorize_days(days)
        )
        total_outstanding += amount

        group = buckets.setdefault(bucket, {"count": 0, "total": 0.0})
        group["count"] += 1
        group["total"] += amount

        name = first_truthy(row, "vendor_name", "customer_name", "name")
        if days >= CRITICAL_DAYS or "90" in bucket:
            critical_items.append(
                {"name": name, "amount": amount, "days": days, "bucket": bucket}
            )

        items.append(
            {
                "name": name,
                "amount": amount,
                "bucket": bucket,
                "days": days,
                "invoiceNumber": first_truthy(row, "invoice_number", "reference"),
                "dueDate": first_present(row, "due_date"),
            }
        )

    round_groups(buckets, "total")
    logger.debug(
        "aging_analyzed",
        type=aging_type or "combined",
        count=len(items),
        critical=len(critical_items),
    )

    return AgingSummary(
        type=aging_type or "combined",
        total_outstanding=round_amount(total_outstanding),
        buckets=buckets,
        critical_items=critical_items,
        items=items,
    )


def bills_to_aging_rows(bills: list[Any]) -> list[dict[str, Any]]:
    """Map unpaid bills onto payable aging rows."""
    require_records(bills, "bills_to_aging_rows")
    return [
        {
            "vendor_name": first_present(b, "vendor_name", "vendorName"),
            "amount": to_number(first_present(b, "amount_due", "amountDue", default=0)),
            "days_outstanding": to_number(
                first_present(b, "past_due_days", "pastDueDays", default=0)
            ),
            "invoice_number": first_present(b, "bill_number", "billNumber"),
            "due_date": first_present(b, "due_date", "dueDate"),
        }
        for b in bills
    ]


def invoices_to_aging_rows(invoices: list[Any]) -> list[dict[str, Any]]:
    """Map unpaid invoices onto receivable aging rows."""
    require_records(invoices, "invoices_to_aging_rows")
    return [
        {
            "customer_name": first_present(inv, "client_name", "clientName"),
            "amount": to_number(first_present(inv, "amount_due", "amountDue", default=0)),
            "days_outstanding": to_number(
                first_present(inv, "past_due_days", "pastDueDays", default=0)
            ),
            "invoice_number": first_present(inv, "invoice_number", "invoiceNumber"),
            "due_date": first_present(inv, "due_date", "dueDate"),
        }
        for inv in invoices
    ]
