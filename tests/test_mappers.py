"""Tests for the JSON document mappers."""

import json
from datetime import date, datetime, timedelta, timezone, UTC

import pytest

from moneyjar.database.mappers import (
    asset_from_dict,
    custom_category_from_dict,
    custom_category_to_dict,
    debt_from_dict,
    decode_field,
    encode_field,
    format_timestamp,
    savings_goal_from_dict,
    savings_goal_to_dict,
    transaction_from_dict,
    transaction_to_dict,
    wallet_from_dict,
    wallet_to_dict,
)
from moneyjar.domain.entities import (
    AssetType,
    CustomCategory,
    DebtType,
    SavingsGoal,
    Transaction,
    TransactionType,
    Wallet,
    WalletType,
)
from moneyjar.domain.errors import ValidationError


class TestTransactionMapper:
    """Tests for transaction documents."""

    def test_to_dict(self):
        """Test camelCase output with an ISO timestamp."""
        txn = Transaction(
            id="t1",
            amount=50_000,
            type=TransactionType.EXPENSE,
            category="Ăn uống",
            date=datetime(2026, 10, 5, 12, 30, tzinfo=UTC),
            note="Phở",
            wallet_id="w1",
        )

        assert transaction_to_dict(txn) == {
            "id": "t1",
            "amount": 50_000,
            "type": "EXPENSE",
            "category": "Ăn uống",
            "date": "2026-10-05T12:30:00.000Z",
            "note": "Phở",
            "walletId": "w1",
        }

    def test_from_browser_document(self):
        """Test reading a document written by the browser app."""
        txn = transaction_from_dict(
            {
                "id": "1712345678901",
                "amount": 120000,
                "type": "INCOME",
                "category": "Lương",
                "date": "2024-04-05T03:21:18.901Z",
                "note": "",
            }
        )

        assert txn.amount == 120_000.0
        assert txn.type == TransactionType.INCOME
        assert txn.date == datetime(2024, 4, 5, 3, 21, 18, 901000, tzinfo=UTC)
        assert txn.wallet_id is None
        assert txn.recurring_bill_id is None

    def test_missing_note_is_empty(self):
        """Test that an absent note reads as an empty string."""
        txn = transaction_from_dict(
            {"id": "1", "amount": 1, "type": "EXPENSE", "category": "x", "date": "2024-01-01"}
        )
        assert txn.note == ""
        assert txn.date.tzinfo is not None


def test_format_timestamp_converts_to_utc():
    """Test that aware timestamps are written in UTC."""
    value = datetime(2026, 10, 5, 7, 0, tzinfo=timezone(timedelta(hours=7)))
    assert format_timestamp(value) == "2026-10-05T00:00:00.000Z"


def test_wallet_optional_fields_omitted():
    """Test that unset optional wallet fields are not written."""
    wallet = Wallet("w2", "Momo", WalletType.E_WALLET, 0, 0)
    data = wallet_to_dict(wallet)

    assert data["type"] == "E-WALLET"
    assert "creditLimit" not in data
    assert wallet_from_dict(data) == wallet


def test_asset_initial_value_defaults_to_value():
    """Test reading an asset without an initial value."""
    asset = asset_from_dict(
        {
            "id": "a1",
            "name": "Vàng",
            "type": "Vàng/Bạc",
            "value": 85_000_000,
            "lastUpdated": "2026-01-01T00:00:00.000Z",
            "quantity": "1",
        }
    )

    assert asset.type == AssetType.GOLD
    assert asset.initial_value == 85_000_000
    assert asset.quantity == 1.0


def test_debt_from_dict():
    """Test reading a debt with a due date."""
    debt = debt_from_dict(
        {"id": "d1", "person": "Nam", "amount": 1000, "type": "LEND", "dueDate": "2026-12-01"}
    )

    assert debt.type == DebtType.LEND
    assert debt.due_date == date(2026, 12, 1)
    assert not debt.is_paid


def test_savings_goal_empty_deadline():
    """Test that goals without a deadline store an empty string."""
    goal = SavingsGoal("g1", "Xe", 50_000_000)
    data = savings_goal_to_dict(goal)

    assert data["deadline"] == ""
    assert savings_goal_from_dict(data).deadline is None


def test_custom_category_type():
    """Test custom categories with and without a type."""
    assert custom_category_to_dict(CustomCategory("Thú cưng")) == {"name": "Thú cưng", "type": None}
    assert custom_category_from_dict({"name": "Cổ tức", "type": "INCOME"}) == CustomCategory(
        "Cổ tức", TransactionType.INCOME
    )


def test_encode_field_keeps_unicode():
    """Test that stored JSON keeps Vietnamese text readable."""
    text = encode_field("category_budgets", {"Ăn uống": 3_000_000})
    assert text == '{"Ăn uống": 3000000}'
    assert decode_field("category_budgets", text) == {"Ăn uống": 3_000_000.0}


@pytest.mark.parametrize(
    "field_name,text",
    [
        ("transactions", "not json"),
        ("transactions", json.dumps([{"id": "1"}])),
        ("wallets", json.dumps([{"id": "w", "name": "x", "type": "SAFE"}])),
        ("budget", json.dumps("abc")),
        ("category_budgets", json.dumps([1, 2])),
    ],
)
def test_decode_field_rejects_bad_documents(field_name, text):
    """Test that malformed documents raise ValidationError."""
    with pytest.raises(ValidationError):
        decode_field(field_name, text)
