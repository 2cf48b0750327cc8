"""Tests for the loan amortization engine."""

import math

import pytest

from moneyjar.domain.loan import (
    amortization_schedule,
    convert_to_vnd,
    monthly_payment,
    remaining_balance,
    simple_interest,
    split_rate_loan,
    stress_test,
)


@pytest.mark.parametrize(
    "principal,term",
    [(0, 1), (1_000_000, 1), (120_000_000, 12), (2_000_000_000, 240), (7, 3)],
)
def test_zero_rate_payment_is_straight_line(principal, term):
    """Test that a zero rate splits the principal evenly."""
    assert monthly_payment(principal, 0, term) == principal / term


def test_annuity_payment():
    """Test the standard annuity formula."""
    # 100M at 12%/yr over 12 months
    assert monthly_payment(100_000_000, 12, 12) == pytest.approx(8_884_878.82, rel=1e-6)


def test_single_month_loan_repays_principal_plus_interest():
    """Test a one-month loan."""
    assert monthly_payment(10_000_000, 12, 1) == pytest.approx(10_100_000)


def test_principal_portions_sum_to_principal():
    """Test that a full schedule amortizes the whole principal."""
    principal = 1_500_000_000
    rows = amortization_schedule(principal, 9.5, 300)

    assert len(rows) == 300
    assert sum(row.principal for row in rows) == pytest.approx(principal, abs=1)
    assert rows[-1].balance == pytest.approx(0, abs=1)


def test_schedule_row_consistency():
    """Test that each row splits the payment into interest and principal."""
    rows = amortization_schedule(500_000_000, 8, 60)
    first = rows[0]

    assert first.interest == pytest.approx(500_000_000 * 0.08 / 12)
    assert first.interest + first.principal == pytest.approx(first.payment)
    assert rows[1].interest < first.interest


def test_zero_term_schedule_is_empty():
    """Test that a zero-month term yields no rows."""
    assert amortization_schedule(1_000_000, 10, 0) == []


def test_remaining_balance_matches_simulation():
    """Test the closed-form balance against a month-by-month run."""
    principal, rate, total = 2_000_000_000, 6, 240
    payment = monthly_payment(principal, rate, total)
    balance = principal
    for _ in range(24):
        balance -= payment - balance * rate / 100 / 12

    assert remaining_balance(principal, rate, total, 24) == pytest.approx(balance, abs=1e-3)


def test_remaining_balance_endpoints():
    """Test the balance before the first and after the last payment."""
    assert remaining_balance(300_000_000, 10, 120, 0) == pytest.approx(300_000_000)
    assert remaining_balance(300_000_000, 10, 120, 120) == pytest.approx(0, abs=1e-6)


def test_remaining_balance_zero_rate():
    """Test that a zero rate degenerates to straight-line subtraction."""
    assert remaining_balance(120_000_000, 0, 12, 3) == pytest.approx(90_000_000)


def test_split_rate_scenario():
    """Test a 2 billion loan with a two-year 6% teaser and 12% floating rate."""
    loan = split_rate_loan(2_000_000_000, 6, 12, 240, 24)

    assert loan.payment_pref == pytest.approx(14_328_622, rel=1e-4)
    assert loan.payment_float > loan.payment_pref
    assert loan.balance_after_pref == pytest.approx(remaining_balance(2_000_000_000, 6, 240, 24))
    assert loan.payment_float == pytest.approx(
        monthly_payment(loan.balance_after_pref, 12, 216)
    )
    assert loan.pref_months == 24
    assert loan.remaining_months == 216


def test_split_rate_without_floating_phase():
    """Test that a preferential period covering the whole term has no floating payment."""
    loan = split_rate_loan(100_000_000, 7, 12, 60, 60)

    assert loan.remaining_months == 0
    assert loan.payment_float == 0
    assert loan.balance_after_pref == pytest.approx(0, abs=1e-6)


def test_split_rate_pref_longer_than_term_is_capped():
    """Test that the preferential period never exceeds the term."""
    loan = split_rate_loan(100_000_000, 7, 12, 60, 120)

    assert loan.pref_months == 60
    assert loan.remaining_months == 0


def test_invalid_term_produces_non_finite_values():
    """Test that bad input yields inf/nan instead of raising."""
    assert math.isinf(monthly_payment(1_000_000, 0, 0))
    assert math.isnan(monthly_payment(0, 0, 0))


def test_simple_interest():
    """Test deposit interest without compounding."""
    assert simple_interest(100_000_000, 6, 12) == pytest.approx(6_000_000)
    assert simple_interest(100_000_000, 6, 6) == pytest.approx(3_000_000)


def test_convert_to_vnd():
    """Test currency conversion at reference rates."""
    assert convert_to_vnd(100, "usd") == 2_545_000
    assert convert_to_vnd(1000, "JPY") == 165_000


def test_convert_unknown_currency():
    """Test that unsupported currencies raise ValueError."""
    with pytest.raises(ValueError, match="Unsupported currency"):
        convert_to_vnd(10, "CHF")


class TestStressTest:
    """Tests for the teaser-rate stress test."""

    def test_missing_loan_returns_none(self):
        """Test that a zero loan or term skips the test."""
        assert stress_test(0, 20, 10_000_000, 0, 6, 2) is None
        assert stress_test(1_000_000_000, 0, 10_000_000, 0, 6, 2) is None

    def test_negative_cashflow_runway(self):
        """Test the runway when rent does not cover the floating payment."""
        result = stress_test(2_000_000_000, 20, 10_000_000, 100_000_000, 6, 2, 12)

        assert result.is_negative
        assert result.net_cashflow == pytest.approx(10_000_000 - result.payment_float)
        assert result.runway_months == pytest.approx(100_000_000 / -result.net_cashflow)
        assert result.has_pref

    def test_positive_cashflow_has_infinite_runway(self):
        """Test that covered payments never exhaust the fund."""
        result = stress_test(500_000_000, 20, 50_000_000, 0, 6, 2, 12)

        assert not result.is_negative
        assert math.isinf(result.runway_months)

    def test_without_preferential_period(self):
        """Test a plain floating-rate loan."""
        result = stress_test(1_000_000_000, 10, 0, 0, 0, 0, 12)

        assert not result.has_pref
        assert result.payment_float == pytest.approx(monthly_payment(1_000_000_000, 12, 120))

    def test_preferential_period_covers_term(self):
        """Test that rent is the whole cashflow when no floating phase follows."""
        result = stress_test(1_000_000_000, 2, 5_000_000, 0, 6, 2)

        assert result.payment_float == 0
        assert result.net_cashflow == 5_000_000
        assert not result.is_negative
        assert math.isinf(result.runway_months)
        assert not result.has_pref

    def test_is_pure(self):
        """Test that repeated calls give identical results."""
        args = (2_000_000_000, 20, 12_000_000, 200_000_000, 6.5, 2, 12)
        assert stress_test(*args) == stress_test(*args)
