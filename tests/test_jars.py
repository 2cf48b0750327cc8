"""Tests for the six-jar method."""

from datetime import datetime, UTC

import pytest

from moneyjar.domain.entities import StandardCategory, TransactionType
from moneyjar.domain.jars import JARS, get_jar, jar_budget_allocation, jar_status


def at(year, month, day):
    return datetime(year, month, day, 12, tzinfo=UTC)


def test_jar_percentages_sum_to_one():
    """Test that the six jars split all of the income."""
    assert len(JARS) == 6
    assert sum(jar.pct for jar in JARS) == pytest.approx(1.0)


def test_jar_categories_do_not_overlap():
    """Test that each category counts against at most one jar."""
    seen = [c for jar in JARS for c in jar.categories]
    assert len(seen) == len(set(seen))


def test_get_jar_is_case_insensitive():
    """Test jar lookup by id."""
    assert get_jar("nec").pct == 0.55
    with pytest.raises(KeyError):
        get_jar("XYZ")


def test_jar_status(transaction_service):
    """Test spending against each jar's share of income."""
    transaction_service.add_transaction(
        5_500_000, TransactionType.EXPENSE, StandardCategory.FOOD.value, date=at(2026, 10, 3)
    )
    transaction_service.add_transaction(
        2_500_000, TransactionType.EXPENSE, StandardCategory.SHOPPING.value, date=at(2026, 10, 4)
    )
    transaction_service.add_transaction(
        9_000_000, TransactionType.EXPENSE, StandardCategory.FOOD.value, date=at(2026, 9, 30)
    )
    transaction_service.add_transaction(
        20_000_000, TransactionType.INCOME, StandardCategory.SALARY.value, date=at(2026, 10, 1)
    )

    statuses = {
        s.jar.id: s
        for s in jar_status(transaction_service.list_transactions(), 20_000_000, "2026-10")
    }

    assert statuses["NEC"].target == pytest.approx(11_000_000)
    assert statuses["NEC"].spent == 5_500_000
    assert statuses["NEC"].percent == pytest.approx(50)
    assert not statuses["NEC"].is_over
    assert statuses["PLAY"].spent == 2_500_000
    assert statuses["PLAY"].is_over
    assert statuses["LTSS"].spent == 0


def test_jar_status_without_income():
    """Test that zero income yields zero percentages."""
    statuses = jar_status([], 0, "2026-10")
    assert all(s.percent == 0 for s in statuses)


def test_jar_budget_allocation():
    """Test jar targets against assigned category limits."""
    allocations = {
        a.jar.id: a
        for a in jar_budget_allocation(
            10_000_000,
            {
                StandardCategory.FOOD.value: 3_000_000,
                StandardCategory.TRANSPORT.value: 1_000_000,
                StandardCategory.GIVING.value: 700_000,
            },
        )
    }

    assert allocations["NEC"].planned == 4_000_000
    assert allocations["NEC"].unallocated == pytest.approx(1_500_000)
    assert allocations["GIVE"].unallocated == pytest.approx(-200_000)
    assert allocations["EDUC"].planned == 0
