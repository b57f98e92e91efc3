"""Invoice (receivable) and bill (payable) document shaping."""

from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present, number_field, require_records
from campfire_insights.numeric import round_amount, round_groups

logger = structlog.get_logger(__name__)


def _add_to_group(
    groups: dict[str, dict[str, Any]], key: str, amount: float, due: float
) -> None:
    group = groups.setdefault(key, {"count": 0, "totalAmount": 0.0, "totalDue": 0.0})
    group["count"] += 1
    group["totalAmount"] += amount
    group["totalDue"] += due


@dataclass
class InvoiceSummary:
    """Invoice totals grouped by status."""

    total_invoices: int
    total_amount: float
    total_paid: float
    total_due: float
    by_status: dict[str, dict[str, Any]] = field(default_factory=dict)
    invoices: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalInvoices": self.total_invoices,
            "totalAmount": self.total_amount,
            "totalPaid": self.total_paid,
            "totalDue": self.total_due,
            "byStatus": self.by_status,
            "invoices": self.invoices,
        }


def shape_invoices(invoices: list[Any]) -> InvoiceSummary:
    """Shape invoices into a compact per-item form with status totals.

    Each invoice keeps only the fields an assistant needs to reason about
    collection; ``amountPaid`` and ``pastDueDays`` are left out when zero.
    """
    require_records(invoices, "shape_invoices")

    total_amount = 0.0
    total_paid = 0.0
    total_due = 0.0
    by_status: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for inv in invoices:
        amount = number_field(inv, "totalAmount", "total_amount")
        paid = number_field(inv, "amountPaid", "amount_paid")
        due = number_field(inv, "amountDue", "amount_due")
        past_due_days = number_field(inv, "pastDueDays", "past_due_days")
        total_amount += amount
        total_paid += paid
        total_due += due

        status = str(first_present(inv, "status", default="unknown"))
        _add_to_group(by_status, status, amount, due)

        item: dict[str, Any] = {
            "id": first_present(inv, "id"),
            "invoiceNumber": first_present(inv, "invoiceNumber", "invoice_number"),
            "clientName": first_present(inv, "clientName", "client_name"),
            "status": status,
            "invoiceDate": first_present(inv, "invoiceDate", "invoice_date"),
            "dueDate": first_present(inv, "dueDate", "due_date"),
            "totalAmount": amount,
        }
        if paid != 0:
            item["amountPaid"] = paid
        item["amountDue"] = due
        if past_due_days != 0:
            item["pastDueDays"] = past_due_days
        shaped.append(item)

    round_groups(by_status, "totalAmount", "totalDue")
    logger.debug("invoices_shaped", count=len(shaped), statuses=sorted(by_status))

    return InvoiceSummary(
        total_invoices=len(invoices),
        total_amount=round_amount(total_amount),
        total_paid=round_amount(total_paid),
        total_due=round_amount(total_due),
        by_status=by_status,
        invoices=shaped,
    )


@dataclass
class BillSummary:
    """Bill totals grouped by status and by vendor."""

    total_bills: int
    total_amount: float
    total_paid: float
    total_due: float
    total_line_items: int
    by_status: dict[str, dict[str, Any]] = field(default_factory=dict)
    by_vendor: dict[str, dict[str, Any]] = field(default_factory=dict)
    bills: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalBills": self.total_bills,
            "totalAmount": self.total_amount,
            "totalPaid": self.total_paid,
            "totalDue": self.total_due,
            "totalLineItems": self.total_line_items,
            "byStatus": self.by_status,
            "byVendor": self.by_vendor,
            "bills": self.bills,
        }


def shape_bills(bills: list[Any]) -> BillSummary:
    """Shape vendor bills and total them by status and vendor."""
    require_records(bills, "shape_bills")

    total_amount = 0.0
    total_paid = 0.0
    total_due = 0.0
    total_line_items = 0
    by_status: dict[str, dict[str, Any]] = {}
    by_vendor: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for b in bills:
        amount = number_field(b, "total_amount", "totalAmount")
        paid = number_field(b, "amount_paid", "amountPaid")
        due = number_field(b, "amount_due", "amountDue")
        total_amount += amount
        total_paid += paid
        total_due += due

        lines = first_present(b, "line_items", "lineItems", "lines")
        line_count = len(lines) if isinstance(lines, list) else 0
        total_line_items += line_count

        status = str(first_present(b, "status", default="unknown"))
        vendor = str(first_present(b, "vendor_name", "vendorName", default="Unknown"))
        _add_to_group(by_status, status, amount, due)
        _add_to_group(by_vendor, vendor, amount, due)

        shaped.append(
            {
                "id": first_present(b, "id"),
                "billNumber": first_present(b, "bill_number", "billNumber"),
                "vendorName": vendor,
                "status": status,
                "billDate": first_present(b, "bill_date", "billDate"),
                "dueDate": first_present(b, "due_date", "dueDate"),
                "totalAmount": amount,
                "amountPaid": paid,
                "amountDue": due,
                "pastDueDays": number_field(b, "past_due_days", "pastDueDays"),
                "lineItemCount": line_count,
            }
        )

    round_groups(by_status, "totalAmount", "totalDue")
    round_groups(by_vendor, "totalAmount", "totalDue")
    logger.debug("bills_shaped", count=len(shaped), vendors=len(by_vendor))

    return BillSummary(
        total_bills=len(bills),
        total_amount=round_amount(total_amount),
        total_paid=round_amount(total_paid),
        total_due=round_amount(total_due),
        total_line_items=total_line_items,
        by_status=by_status,
        by_vendor=by_vendor,
        bills=shaped,
    )
