"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment variables before importing settings
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "console")


@pytest.fixture
def income_statement():
    """Income statement as a flat list of labelled rows."""
    return [
        {"name": "Revenue", "total": 500000},
        {"name": "Cost of Goods Sold", "total": 200000},
        {"name": "Operating Expenses", "total": 350000},
        {"name": "Net Income", "total": 150000},
    ]


@pytest.fixture
def balance_sheet():
    """Balance sheet keyed by section name."""
    return {
        "Cash and Cash Equivalents": {"total": 800000},
        "Total Current Assets": {"total": 1200000},
        "Total Current Liabilities": {"total": 400000},
    }


@pytest.fixture
def ledger_transactions():
    """General ledger transactions in snake_case."""
    return [
        {
            "id": 1,
            "date": "2026-01-15",
            "description": "Office rent",
            "account_name": "Rent Expense",
            "account_type": "Expense",
            "vendor_name": "Landlord Inc",
            "debit_amount": 5000,
            "credit_amount": 0,
        },
        {
            "id": 2,
            "date": "2026-01-16",
            "description": "Client payment",
            "account_name": "Accounts Receivable",
            "account_type": "Asset",
            "vendor_name": None,
            "debit_amount": 0,
            "credit_amount": 15000,
        },
        {
            "id": 3,
            "date": "2026-01-17",
            "description": "Software subscription",
            "account_name": "Software Expense",
            "account_type": "Expense",
            "vendor_name": "SaaS Co",
            "debit_amount": 200,
            "credit_amount": 0,
        },
    ]


@pytest.fixture
def aging_rows():
    """Payable aging rows with explicit buckets."""
    return [
        {"vendor_name": "Vendor A", "amount": 10000, "days_outstanding": 15, "aging_bucket": "0-30"},
        {"vendor_name": "Vendor B", "amount": 5000, "days_outstanding": 45, "aging_bucket": "31-60"},
        {"vendor_name": "Vendor C", "amount": 8000, "days_outstanding": 95, "aging_bucket": "90+"},
        {"vendor_name": "Vendor D", "amount": 3000, "days_outstanding": 100, "aging_bucket": "90+"},
    ]


@pytest.fixture
def invoice_records():
    """Receivable invoices in camelCase, as returned by the AR list endpoint."""
    return [
        {
            "id": 101,
            "invoiceNumber": "INV-001",
            "clientName": "Acme Corp",
            "contractName": "Project Alpha",
            "entityName": "Main Entity",
            "status": "unpaid",
            "invoiceDate": "2026-01-15",
            "dueDate": "2026-02-14",
            "totalAmount": 10000,
            "amountPaid": 0,
            "amountDue": 10000,
            "pastDueDays": 0,
            "currency": "USD",
            "paymentTermName": "Net 30",
        },
        {
            "id": 102,
            "invoiceNumber": "INV-002",
            "clientName": "Beta Inc",
            "contractName": "Project Beta",
            "entityName": "Main Entity",
            "status": "paid",
            "invoiceDate": "2025-12-01",
            "dueDate": "2025-12-31",
            "paidDate": "2025-12-28",
            "totalAmount": 5000,
            "amountPaid": 5000,
            "amountDue": 0,
            "pastDueDays": 0,
            "currency": "USD",
            "paymentTermName": "Net 30",
        },
        {
            "id": 103,
            "invoiceNumber": "INV-003",
            "clientName": "Acme Corp",
            "contractName": "Project Alpha",
            "entityName": "Main Entity",
            "status": "unpaid",
            "invoiceDate": "2025-11-01",
            "dueDate": "2025-12-01",
            "totalAmount": 8000,
            "amountPaid": 0,
            "amountDue": 8000,
            "pastDueDays": 69,
            "currency": "USD",
            "paymentTermName": "Net 30",
        },
    ]


@pytest.fixture
def bill_records():
    """Vendor bills in snake_case."""
    return [
        {
            "id": 501,
            "bill_number": "BILL-001",
            "vendor_name": "Paper Supply Co",
            "status": "unpaid",
            "bill_date": "2026-01-05",
            "due_date": "2026-02-04",
            "total_amount": 1200.50,
            "amount_paid": 0,
            "amount_due": 1200.50,
            "past_due_days": 0,
            "line_items": [{"amount": 1000}, {"amount": 200.50}],
        },
        {
            "id": 502,
            "bill_number": "BILL-002",
            "vendor_name": "Cloud Hosting LLC",
            "status": "paid",
            "bill_date": "2025-12-01",
            "due_date": "2025-12-31",
            "total_amount": 900,
            "amount_paid": 900,
            "amount_due": 0,
            "past_due_days": 0,
            "line_items": [{"amount": 900}],
        },
        {
            "id": 503,
            "bill_number": "BILL-003",
            "vendor_name": "Paper Supply Co",
            "status": "unpaid",
            "bill_date": "2025-10-01",
            "due_date": "2025-10-31",
            "total_amount": 300,
            "amount_paid": 100,
            "amount_due": 200,
            "past_due_days": 95,
        },
    ]


@pytest.fixture
def trial_balance_report():
    """Trial balance report wrapped the way the API returns it."""
    return {
        "startDate": "2026-01-01",
        "endDate": "2026-01-31",
        "trialBalance": {
            "accounts": [
                {
                    "id": "1",
                    "name": "Cash",
                    "number": "1000",
                    "accountType": "Asset",
                    "balances": {"debits": 50000, "credits": 10000},
                },
                {
                    "id": "2",
                    "name": "Accounts Receivable",
                    "number": "1100",
                    "accountType": "Asset",
                    "balances": {"debits": 30000, "credits": 5000},
                },
                {
                    "id": "3",
                    "name": "Revenue",
                    "number": "4000",
                    "accountType": "Revenue",
                    "balances": {"debits": 0, "credits": 65000},
                },
            ],
        },
    }
