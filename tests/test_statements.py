"""Tests for statement search, the financial snapshot and burn rate."""

import pytest

from campfire_insights.statements import (
    REVENUE_KEYWORDS,
    MonthlyStatement,
    build_financial_snapshot,
    classify_trend,
    compute_burn_rate,
    extract_total,
)


def _month(label: str, revenue: float, expenses: float) -> dict:
    return {
        "label": label,
        "data": [{"name": "Revenue", "total": revenue}, {"name": "Expenses", "total": expenses}],
    }


class TestExtractTotal:
    """Tests for the recursive statement search."""

    def test_empty_inputs_return_zero(self):
        assert extract_total(None, ["revenue"]) == 0
        assert extract_total([], ["revenue"]) == 0
        assert extract_total({}, ["revenue"]) == 0
        assert extract_total("Revenue", ["revenue"]) == 0

    def test_first_matching_row_wins(self):
        rows = [
            {"name": "Product Revenue", "total": 100},
            {"name": "Service Revenue", "total": 900},
        ]
        assert extract_total(rows, ["revenue"]) == 100

    def test_label_aliases(self):
        rows = [
            {"label": "Sales Revenue", "amount": 75000},
            {"title": "Total Expenses", "value": 50000},
            {"account_name": "Operating Bank", "balance": 1234},
        ]
        assert extract_total(rows, ["revenue"]) == 75000
        assert extract_total(rows, ["expense"]) == 50000
        assert extract_total(rows, ["bank"]) == 1234

    def test_match_is_case_insensitive(self):
        assert extract_total([{"name": "NET INCOME", "total": 7}], ["net income"]) == 7

    def test_recurses_into_children(self):
        rows = [{"name": "Operating", "children": [{"name": "Revenue", "total": 200000}]}]
        assert extract_total(rows, ["revenue"]) == 200000

    @pytest.mark.parametrize("child_key", ["children", "rows", "items", "line_items"])
    def test_child_collection_keys(self, child_key):
        rows = [{"name": "Section", child_key: [{"name": "Cash", "total": 5}]}]
        assert extract_total(rows, ["cash"]) == 5

    def test_zero_valued_match_stops_its_level(self):
        """A matched row with no value ends the search of that list."""
        rows = [{"name": "Revenue"}, {"name": "Other Revenue", "total": 10}]
        assert extract_total(rows, ["revenue"]) == 0

    def test_zero_from_children_continues_with_siblings(self):
        rows = [
            {"name": "Group A", "rows": [{"name": "Unrelated", "total": 1}]},
            {"name": "Revenue", "total": 42},
        ]
        assert extract_total(rows, ["revenue"]) == 42

    def test_numeric_strings_are_coerced(self):
        assert extract_total([{"name": "Revenue", "total": "1500.25"}], ["revenue"]) == 1500.25

    def test_section_number_value(self):
        assert extract_total({"revenue": 300000, "expense": 180000}, ["expense"]) == 180000

    def test_section_total_and_amount(self):
        assert extract_total({"Revenue": {"total": 5, "amount": 9}}, ["revenue"]) == 5
        assert extract_total({"revenue": {"amount": 400000}}, ["revenue"]) == 400000

    def test_section_rows_are_summed(self):
        """Unlike row lists, a matched section's rows are summed."""
        data = {"revenue": [{"amount": 100000}, {"total": 50000}, {"value": 25}]}
        assert extract_total(data, ["revenue"]) == 150025

    def test_nested_sections(self):
        bs = {"assets": {"current": {"Cash and Cash Equivalents": 250000}}}
        assert extract_total(bs, ["cash"]) == 250000

    def test_matched_section_without_value_is_searched(self):
        data = {"Revenue": {"Product Sales": {"total": 12}}}
        assert extract_total(data, REVENUE_KEYWORDS) == 12

    def test_sections_holding_row_lists(self):
        data = {"report": {"sections": [{"name": "Income", "rows": [{"name": "Sales", "total": 3}]}]}}
        assert extract_total(data, ["sales"]) == 3

    def test_no_match_anywhere(self):
        assert extract_total({"a": {"b": [{"name": "x", "total": 1}]}}, ["revenue"]) == 0


class TestFinancialSnapshot:
    """Tests for build_financial_snapshot."""

    def test_extracts_key_metrics(self, income_statement, balance_sheet):
        snap = build_financial_snapshot(income_statement, balance_sheet, {}, "Jan 2026")

        assert snap.period == "Jan 2026"
        assert snap.revenue == 500000
        assert snap.expenses == 350000
        assert snap.net_income == 150000
        assert snap.cash_position == 800000

    def test_margins_and_current_ratio(self, income_statement, balance_sheet):
        snap = build_financial_snapshot(income_statement, balance_sheet, {}, "Jan 2026")

        assert snap.gross_margin_percent == 60
        assert snap.net_margin_percent == 30
        assert snap.current_ratio == 3

    def test_net_income_fallback(self):
        income = [{"name": "Revenue", "total": 1000}, {"name": "Expenses", "total": 400}]
        snap = build_financial_snapshot(income, {}, {}, "Fallback")

        assert snap.net_income == 600
        assert snap.net_margin_percent == 60

    def test_negative_expenses_reported_as_absolute(self):
        income = [{"name": "Revenue", "total": 1000}, {"name": "Expenses", "total": -400}]
        snap = build_financial_snapshot(income, {}, {}, "Signs")

        assert snap.expenses == 400

    def test_negative_cogs_still_reduces_gross_profit(self):
        income = [{"name": "Revenue", "total": 1000}, {"name": "COGS", "total": -250}]
        snap = build_financial_snapshot(income, {}, {}, "COGS")

        assert snap.gross_margin_percent == 75

    def test_empty_data(self):
        snap = build_financial_snapshot(None, None, None, "Empty")

        assert snap.revenue == 0
        assert snap.net_income == 0
        assert snap.cash_position is None
        assert snap.gross_margin_percent is None
        assert snap.net_margin_percent is None
        assert snap.current_ratio is None

    def test_to_dict(self, income_statement, balance_sheet):
        result = build_financial_snapshot(income_statement, balance_sheet, {}, "Jan").to_dict()

        assert result == {
            "period": "Jan",
            "revenue": 500000,
            "expenses": 350000,
            "netIncome": 150000,
            "grossMarginPercent": 60,
            "netMarginPercent": 30,
            "cashPosition": 800000,
            "currentRatio": 3,
        }

    def test_deterministic(self, income_statement, balance_sheet):
        first = build_financial_snapshot(income_statement, balance_sheet, {}, "P").to_dict()
        second = build_financial_snapshot(income_statement, balance_sheet, {}, "P").to_dict()
        assert first == second


class TestBurnRate:
    """Tests for compute_burn_rate."""

    @pytest.fixture
    def steady_months(self):
        return [
            _month("Nov 2025", 80000, 100000),
            _month("Dec 2025", 85000, 105000),
            _month("Jan 2026", 90000, 110000),
        ]

    @pytest.fixture
    def cash(self):
        return {"Cash": {"total": 500000}}

    def test_average_burn(self, steady_months, cash):
        result = compute_burn_rate(steady_months, cash)

        assert result.monthly_burn_avg == 20000
        assert [b["burn"] for b in result.monthly_burns] == [20000, 20000, 20000]
        assert result.monthly_burns[0]["month"] == "Nov 2025"

    def test_runway(self, steady_months, cash):
        result = compute_burn_rate(steady_months, cash)

        assert result.cash_position == 500000
        assert result.runway_months == 25

    def test_stable_trend(self, steady_months, cash):
        assert compute_burn_rate(steady_months, cash).trend == "stable"

    def test_increasing_trend(self, cash):
        months = [_month(f"M{i}", 50000, 50000 + 10000 * i) for i in range(1, 5)]
        assert compute_burn_rate(months, cash).trend == "increasing"

    def test_decreasing_trend(self, cash):
        months = [_month(f"M{i}", 50000, 100000 - 10000 * i) for i in range(1, 5)]
        assert compute_burn_rate(months, cash).trend == "decreasing"

    def test_two_months_always_stable(self, cash):
        months = [_month("M1", 0, 10000), _month("M2", 0, 90000)]
        assert compute_burn_rate(months, cash).trend == "stable"

    def test_profitable_company_has_no_runway(self, cash):
        months = [_month(f"M{i}", 100000, 60000) for i in range(3)]
        result = compute_burn_rate(months, cash)

        assert result.monthly_burn_avg == -40000
        assert result.runway_months is None

    def test_no_cash_means_no_runway(self, steady_months):
        result = compute_burn_rate(steady_months, {})

        assert result.cash_position is None
        assert result.runway_months is None

    def test_empty_months(self, cash):
        result = compute_burn_rate([], cash)

        assert result.monthly_burn_avg == 0
        assert result.monthly_burns == []
        assert result.trend == "stable"
        assert result.runway_months is None

    def test_accepts_monthly_statement_objects(self, cash):
        months = [
            MonthlyStatement(label=m["label"], data=m["data"])
            for m in [_month("A", 0, 100), _month("B", 0, 100), _month("C", 0, 100)]
        ]
        assert compute_burn_rate(months, cash).monthly_burn_avg == 100

    def test_to_dict(self, steady_months, cash):
        result = compute_burn_rate(steady_months, cash).to_dict()

        assert set(result) == {
            "monthlyBurnAvg",
            "monthlyBurns",
            "trend",
            "cashPosition",
            "runwayMonths",
        }
        assert result["monthlyBurns"][2] == {"month": "Jan 2026", "burn": 20000}


class TestClassifyTrend:
    """Tests for classify_trend."""

    def test_odd_length_splits_at_floor_midpoint(self):
        # first half [10], second half [10, 40] -> diff 15 > 2.0
        assert classify_trend([10, 10, 40], 20) == "increasing"

    def test_within_ten_percent_is_stable(self):
        assert classify_trend([100, 100, 105, 105], 102.5) == "stable"
