"""Tests for the business profit and loss."""

from datetime import date, datetime, UTC

import pytest

from moneyjar.domain.business import (
    COST_CATEGORY,
    REVENUE_CATEGORY,
    BusinessService,
    ProfitAndLoss,
)
from moneyjar.domain.entities import StandardCategory, TransactionType
from moneyjar.domain.errors import ValidationError


def at(year, month, day):
    return datetime(year, month, day, 12, tzinfo=UTC)


@pytest.fixture
def business_service(store):
    return BusinessService(store)


def test_record_revenue_and_cost(business_service, reopen):
    """Test that sales and costs are booked in the business categories."""
    sale = business_service.record_revenue(3_500_000)
    cost = business_service.record_cost(1_000_000, note="Nhập vải")

    assert sale.type == TransactionType.INCOME
    assert sale.category == StandardCategory.SELLING.value
    assert sale.note == "Doanh thu bán hàng"
    assert cost.type == TransactionType.EXPENSE
    assert cost.category == StandardCategory.BUSINESS_COST.value
    assert cost.note == "Nhập vải"
    assert len(reopen().transactions) == 2


def test_record_rejects_unknown_wallet(business_service):
    """Test that the wallet is validated."""
    with pytest.raises(ValidationError):
        business_service.record_revenue(1_000, wallet_id="nope")


def test_summary_ignores_other_categories(business_service, transaction_service):
    """Test revenue, cost, profit and margin over business transactions only."""
    business_service.record_revenue(10_000_000)
    business_service.record_revenue(2_000_000)
    business_service.record_cost(9_000_000)
    transaction_service.add_transaction(20_000_000, TransactionType.INCOME, "Lương")
    transaction_service.add_transaction(1_000_000, TransactionType.EXPENSE, "Ăn uống")

    summary = business_service.summary()

    assert summary.revenue == 12_000_000
    assert summary.cost == 9_000_000
    assert summary.profit == 3_000_000
    assert summary.margin == pytest.approx(25.0)
    assert len(business_service.business_transactions()) == 3


def test_margin_without_revenue():
    """Test that a loss without sales has a 0 margin."""
    result = ProfitAndLoss(revenue=0, cost=500_000)
    assert result.profit == -500_000
    assert result.margin == 0


def test_monthly_breakdown(business_service):
    """Test per-month figures, oldest first, with empty months included."""
    business_service.record_revenue(5_000_000, date=at(2026, 10, 3))
    business_service.record_cost(2_000_000, date=at(2026, 10, 4))
    business_service.record_cost(1_000_000, date=at(2026, 8, 15))
    business_service.record_revenue(7_000_000, date=at(2026, 3, 1))

    rows = business_service.monthly(3, today=date(2026, 10, 19))

    assert [r.month for r in rows] == ["2026-08", "2026-09", "2026-10"]
    assert rows[0].result == ProfitAndLoss(revenue=0, cost=1_000_000)
    assert rows[1].result == ProfitAndLoss(revenue=0, cost=0)
    assert rows[2].result.profit == 3_000_000


def test_monthly_spans_year_boundary(business_service):
    """Test that the window crosses into the previous year."""
    rows = business_service.monthly(3, today=date(2026, 1, 5))
    assert [r.month for r in rows] == ["2025-11", "2025-12", "2026-01"]


def test_monthly_requires_positive_months(business_service):
    with pytest.raises(ValidationError):
        business_service.monthly(0)


def test_business_transactions_newest_first(business_service):
    """Test the order of the recent list."""
    business_service.record_cost(1_000, date=at(2026, 1, 1))
    business_service.record_revenue(2_000, date=at(2026, 2, 1))

    categories = [t.category for t in business_service.business_transactions()]
    assert categories == [REVENUE_CATEGORY, COST_CATEGORY]
