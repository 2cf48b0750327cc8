"""Tests for the harvest and sowing report."""

from datetime import date, datetime, UTC

import pytest

from moneyjar.domain.entities import StandardCategory, TransactionType
from moneyjar.domain.errors import ValidationError
from moneyjar.domain.report import CategoryFlow, ReportService, settle_profit

SALARY = StandardCategory.SALARY.value
FOOD = StandardCategory.FOOD.value
EDUCATION = StandardCategory.EDUCATION.value
SELLING = StandardCategory.SELLING.value
BUSINESS_COST = StandardCategory.BUSINESS_COST.value


def at(year, month, day):
    return datetime(year, month, day, 12, tzinfo=UTC)


@pytest.fixture
def report_service(store):
    return ReportService(store)


@pytest.fixture
def ledger(transaction_service):
    add = transaction_service.add_transaction
    add(20_000_000, TransactionType.INCOME, SALARY, date=at(2026, 10, 1))
    add(5_000_000, TransactionType.INCOME, SELLING, date=at(2026, 10, 3))
    add(2_000_000, TransactionType.EXPENSE, BUSINESS_COST, date=at(2026, 10, 4))
    add(4_000_000, TransactionType.EXPENSE, FOOD, date=at(2026, 10, 5))
    add(3_000_000, TransactionType.EXPENSE, EDUCATION, date=at(2026, 10, 6))
    add(16_000_000, TransactionType.INCOME, SALARY, date=at(2026, 9, 1))
    add(5_000_000, TransactionType.EXPENSE, FOOD, date=at(2026, 9, 2))
    add(1_000_000, TransactionType.EXPENSE, FOOD, date=at(2025, 12, 2))


def test_monthly_report(report_service, ledger):
    """Test harvest and sowing classification for a month."""
    report = report_service.monthly_report("2026-10")

    assert [f.category for f in report.harvest] == [SALARY, SELLING]
    assert [f.category for f in report.sowing] == [FOOD, EDUCATION, BUSINESS_COST]
    assert report.income == 25_000_000
    assert report.expense == 9_000_000
    assert report.profit == 16_000_000
    assert report.harvest_ratio == pytest.approx(25 / 9)


def test_growth_against_previous_month(report_service, ledger):
    """Test that each category is compared with the month before."""
    report = report_service.monthly_report("2026-10")
    salary = report.harvest[0]
    food = report.sowing[0]

    assert salary.previous_net == 16_000_000
    assert salary.growth == pytest.approx(25.0)
    assert food.previous_net == -5_000_000
    assert food.growth == pytest.approx(20.0)
    assert report.harvest[1].growth == 0


def test_good_seed_split(report_service, ledger):
    """Test that education and business costs count as good seed."""
    report = report_service.monthly_report("2026-10")
    assert report.good_seed_total == 5_000_000
    assert report.consumption_total == 4_000_000


def test_yearly_report(report_service, ledger):
    """Test that a yearly report covers the calendar year only."""
    report = report_service.yearly_report(2026)
    assert report.period == "2026"
    assert report.income == 41_000_000
    assert report.expense == 14_000_000
    assert all(f.previous_net == 0 for f in report.harvest + report.sowing)


def test_empty_period(report_service):
    report = report_service.monthly_report("2026-10")
    assert report.harvest == [] and report.sowing == []
    assert report.harvest_ratio == 0


def test_profit_trend(report_service, ledger):
    """Test monthly profit for the last months, oldest first."""
    trend = report_service.profit_trend(3, today=date(2026, 10, 19))
    assert trend == [("2026-08", 0.0), ("2026-09", 11_000_000), ("2026-10", 16_000_000)]


def test_category_flow_zero_net_is_harvest():
    """Test that a break-even category is harvest, not sowing."""
    flow = CategoryFlow("Khác", income=100, expense=100)
    assert flow.net == 0
    assert not flow.is_good_seed


class TestSettleProfit:
    """Tests for splitting profit between savings and investment."""

    def test_default_half(self):
        settlement = settle_profit(16_000_000)
        assert settlement.savings == 8_000_000
        assert settlement.investment == 8_000_000

    def test_custom_share(self):
        settlement = settle_profit(10_000_000, savings_percent=70)
        assert settlement.savings == pytest.approx(7_000_000)
        assert settlement.investment == pytest.approx(3_000_000)

    def test_loss_has_nothing_to_split(self):
        """Test that a loss settles to zero on both sides."""
        settlement = settle_profit(-2_000_000)
        assert settlement.savings == 0
        assert settlement.investment == 0

    @pytest.mark.parametrize("share", [-1, 101])
    def test_share_out_of_range(self, share):
        with pytest.raises(ValidationError):
            settle_profit(1_000, share)
