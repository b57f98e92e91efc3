"""General ledger and uncategorized bank transaction shaping."""

from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present, first_truthy, number_field, require_records
from campfire_insights.numeric import round_amount, round_groups

logger = structlog.get_logger(__name__)

# Keys that carry a categorization suggestion on uncategorized transactions
SUGGESTION_KEYS = (
    "suggested_account",
    "suggestedAccount",
    "suggested_account_name",
    "suggestedAccountName",
    "suggested_vendor",
    "suggestedVendor",
    "suggested_vendor_name",
    "suggestedVendorName",
)


@dataclass
class TransactionSummary:
    """Debit/credit totals for a batch of ledger transactions."""

    total_transactions: int
    total_debits: float
    total_credits: float
    by_account_type: dict[str, dict[str, Any]] = field(default_factory=dict)
    transactions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTransactions": self.total_transactions,
            "totalDebits": self.total_debits,
            "totalCredits": self.total_credits,
            "byAccountType": self.by_account_type,
            "transactions": self.transactions,
        }


def enrich_transactions(transactions: list[Any]) -> TransactionSummary:
    """Shape ledger transactions and total them by account type."""
    require_records(transactions, "enrich_transactions")

    total_debits = 0.0
    total_credits = 0.0
    by_account_type: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for t in transactions:
        debit = number_field(t, "debit_amount", "debit", truthy=True)
        credit = number_field(t, "credit_amount", "credit", truthy=True)
        total_debits += debit
        total_credits += credit

        account_type = str(first_truthy(t, "account_type", "accountType", default="Unknown"))
        group = by_account_type.setdefault(
            account_type, {"count": 0, "debits": 0.0, "credits": 0.0}
        )
        group["count"] += 1
        group["debits"] += debit
        group["credits"] += credit

        shaped.append(
            {
                "id": first_present(t, "id"),
                "date": first_truthy(t, "date", "transaction_date"),
                "description": first_truthy(t, "description", "memo"),
                "accountName": first_truthy(t, "account_name", "accountName"),
                "accountType": account_type,
                "vendorName": first_truthy(t, "vendor_name", "vendorName"),
                "departmentName": first_truthy(t, "department_name", "departmentName"),
                "debit": debit,
                "credit": credit,
            }
        )

    round_groups(by_account_type, "debits", "credits")
    logger.debug("transactions_shaped", count=len(shaped), groups=len(by_account_type))

    return TransactionSummary(
        total_transactions=len(transactions),
        total_debits=round_amount(total_debits),
        total_credits=round_amount(total_credits),
        by_account_type=by_account_type,
        transactions=shaped,
    )


@dataclass
class UncategorizedSummary:
    """Uncategorized bank transactions awaiting an account."""

    total_count: int
    total_amount: float
    total_debits: float
    total_credits: float
    with_suggestions: int
    linked_to_bills: int
    by_vendor: dict[str, dict[str, Any]] = field(default_factory=dict)
    transactions: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCount": self.total_count,
            "totalAmount": self.total_amount,
            "totalDebits": self.total_debits,
            "totalCredits": self.total_credits,
            "withSuggestions": self.with_suggestions,
            "linkedToBills": self.linked_to_bills,
            "byVendor": self.by_vendor,
            "transactions": self.transactions,
        }


def shape_uncategorized_transactions(transactions: list[Any]) -> UncategorizedSummary:
    """Shape uncategorized transactions and total them by vendor or merchant.

    Each item carries one populated side, so its ``amount`` is debit plus
    credit.
    """
    require_records(transactions, "shape_uncategorized_transactions")

    total_debits = 0.0
    total_credits = 0.0
    with_suggestions = 0
    linked_to_bills = 0
    by_vendor: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for t in transactions:
        debit = number_field(t, "debit_amount", "debitAmount", "debit")
        credit = number_field(t, "credit_amount", "creditAmount", "credit")
        amount = debit + credit
        total_debits += debit
        total_credits += credit

        vendor = str(
            first_present(
                t,
                "vendor_name",
                "vendorName",
                "merchant_name",
                "merchantName",
                default="Unknown",
            )
        )
        group = by_vendor.setdefault(vendor, {"count": 0, "total": 0.0})
        group["count"] += 1
        group["total"] += amount

        if first_present(t, *SUGGESTION_KEYS) is not None:
            with_suggestions += 1

        bill_id = first_present(t, "bill", "bill_id", "billId")
        bill_number = first_present(t, "bill_number", "billNumber")
        if bill_id is not None or bill_number is not None:
            linked_to_bills += 1

        shaped.append(
            {
                "id": first_present(t, "id"),
                "date": first_present(t, "posted_at", "postedAt", "date", "transaction_date"),
                "description": first_present(t, "description", "memo"),
                "debit": debit,
                "credit": credit,
                "amount": round_amount(amount),
                "vendorName": vendor,
                "bankAccountName": first_present(t, "bank_account_name", "bankAccountName"),
                "suggestedAccountName": first_present(
                    t, "suggested_account_name", "suggestedAccountName"
                ),
                "suggestedVendorName": first_present(
                    t, "suggested_vendor_name", "suggestedVendorName"
                ),
                "billId": bill_id,
                "billNumber": bill_number,
            }
        )

    round_groups(by_vendor, "total")
    logger.debug(
        "uncategorized_transactions_shaped",
        count=len(shaped),
        with_suggestions=with_suggestions,
    )

    return UncategorizedSummary(
        total_count=len(transactions),
        total_amount=round_amount(total_debits + total_credits),
        total_debits=round_amount(total_debits),
        total_credits=round_amount(total_credits),
        with_suggestions=with_suggestions,
        linked_to_bills=linked_to_bills,
        by_vendor=by_vendor,
        transactions=shaped,
    )
