"""Trial balance shaping."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from campfire_insights.fields import first_present
from campfire_insights.numeric import round_amount, round_groups, to_number

logger = structlog.get_logger(__name__)


@dataclass
class TrialBalanceSummary:
    """Per-account debits and credits with account-type subtotals."""

    start_date: str | None
    end_date: str | None
    total_debits: float
    total_credits: float
    account_count: int
    by_account_type: dict[str, dict[str, Any]] = field(default_factory=dict)
    accounts: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    def to_dict(self) -> dict[str, Any]:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "totalDebits": self.total_debits,
            "totalCredits": self.total_credits,
            "accountCount": self.account_count,
            "byAccountType": self.by_account_type,
            "accounts": self.accounts,
        }


def _account_amount(account: Any, key: str) -> Any:
    balances = first_present(account, "balances")
    if isinstance(balances, Mapping) and balances.get(key) is not None:
        return balances[key]
    return first_present(account, key, default=0)


def shape_trial_balance(data: Any) -> TrialBalanceSummary:
    """Shape a trial balance report.

    Args:
        data: The report response. Accounts may sit under ``trialBalance`` /
            ``trial_balance`` or directly under ``accounts``; ``None`` yields
            an empty summary.

    Returns:
        TrialBalanceSummary whose debit and credit totals should match.
    """
    start_date = first_present(data, "startDate", "start_date")
    end_date = first_present(data, "endDate", "end_date")
    report = first_present(data, "trialBalance", "trial_balance", default=data)
    accounts = first_present(report, "accounts", default=[])
    if not isinstance(accounts, list):
        accounts = []

    total_debits = 0.0
    total_credits = 0.0
    by_account_type: dict[str, dict[str, Any]] = {}
    shaped: list[dict[str, Any]] = []

    for a in accounts:
        debits = to_number(_account_amount(a, "debits"))
        credits = to_number(_account_amount(a, "credits"))
        total_debits += debits
        total_credits += credits

        account_type = str(first_present(a, "accountType", "account_type", default="Unknown"))
        group = by_account_type.setdefault(
            account_type, {"count": 0, "debits": 0.0, "credits": 0.0}
        )
        group["count"] += 1
        group["debits"] += debits
        group["credits"] += credits

        shaped.append(
            {
                "id": first_present(a, "id"),
                "name": first_present(a, "name"),
                "number": first_present(a, "number"),
                "accountType": account_type,
                "debits": debits,
                "credits": credits,
                "net": round_amount(debits - credits),
                "department": first_present(a, "department"),
            }
        )

    round_groups(by_account_type, "debits", "credits")
    summary = TrialBalanceSummary(
        start_date=start_date,
        end_date=end_date,
        total_debits=round_amount(total_debits),
        total_credits=round_amount(total_credits),
        account_count=len(shaped),
        by_account_type=by_account_type,
        accounts=shaped,
    )
    if shaped and not summary.is_balanced:
        logger.warning(
            "trial_balance_out_of_balance",
            total_debits=summary.total_debits,
            total_credits=summary.total_credits,
        )
    logger.debug("trial_balance_shaped", accounts=len(shaped))
    return summary
