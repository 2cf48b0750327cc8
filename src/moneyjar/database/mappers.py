"""Mapper functions between domain entities and persisted JSON documents.

Documents use the camelCase field names of the moneyjar browser app, so a
backup taken there loads here unchanged.
"""

import json
from datetime import date, datetime, UTC
from typing import Any, Callable, Optional

from moneyjar.domain import entities as domain
from moneyjar.domain.errors import ValidationError
from moneyjar.utils.date_parser import parse_timestamp

# Storage keys, one per state field
TRANSACTIONS_KEY = "transactions"
WALLETS_KEY = "wallets"
BUDGET_KEY = "budget"
CATEGORY_BUDGETS_KEY = "categoryBudgets"
CUSTOM_CATEGORIES_KEY = "customCategories"
SAVINGS_GOALS_KEY = "savingsGoals"
RECURRING_BILLS_KEY = "recurringBills"
ASSETS_KEY = "assets"
DEBTS_KEY = "debts"
PLANNED_INCOME_KEY = "planned_income"

STATE_FIELD_KEYS: dict[str, str] = {
    "transactions": TRANSACTIONS_KEY,
    "wallets": WALLETS_KEY,
    "budget": BUDGET_KEY,
    "category_budgets": CATEGORY_BUDGETS_KEY,
    "custom_categories": CUSTOM_CATEGORIES_KEY,
    "savings_goals": SAVINGS_GOALS_KEY,
    "recurring_bills": RECURRING_BILLS_KEY,
    "assets": ASSETS_KEY,
    "debts": DEBTS_KEY,
    "planned_income": PLANNED_INCOME_KEY,
}


def format_timestamp(value: datetime) -> str:
    """Format a datetime like JavaScript's toISOString for aware values."""
    if value.tzinfo is None:
        return value.isoformat(timespec="milliseconds")
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def transaction_to_dict(txn: domain.Transaction) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": txn.id,
        "amount": txn.amount,
        "type": txn.type.value,
        "category": txn.category,
        "date": format_timestamp(txn.date),
        "note": txn.note,
    }
    if txn.wallet_id is not None:
        data["walletId"] = txn.wallet_id
    if txn.recurring_bill_id is not None:
        data["recurringBillId"] = txn.recurring_bill_id
    return data


def transaction_from_dict(data: dict[str, Any]) -> domain.Transaction:
    return domain.Transaction(
        id=str(data["id"]),
        amount=float(data["amount"]),
        type=domain.TransactionType(data["type"]),
        category=str(data["category"]),
        date=parse_timestamp(data["date"]),
        note=data.get("note") or "",
        wallet_id=data.get("walletId"),
        recurring_bill_id=data.get("recurringBillId"),
    )


def wallet_to_dict(wallet: domain.Wallet) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": wallet.id,
        "name": wallet.name,
        "type": wallet.type.value,
        "initialBalance": wallet.initial_balance,
        "currentBalance": wallet.current_balance,
    }
    optional = {
        "creditLimit": wallet.credit_limit,
        "accountNumber": wallet.account_number,
        "bankName": wallet.bank_name,
        "description": wallet.description,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    return data


def wallet_from_dict(data: dict[str, Any]) -> domain.Wallet:
    return domain.Wallet(
        id=str(data["id"]),
        name=data["name"],
        type=domain.WalletType(data["type"]),
        initial_balance=float(data.get("initialBalance", 0)),
        current_balance=float(data.get("currentBalance", 0)),
        credit_limit=_optional_float(data.get("creditLimit")),
        account_number=data.get("accountNumber"),
        bank_name=data.get("bankName"),
        description=data.get("description"),
    )


def asset_to_dict(asset: domain.Asset) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": asset.id,
        "name": asset.name,
        "type": asset.type.value,
        "value": asset.value,
        "initialValue": asset.initial_value,
        "lastUpdated": format_timestamp(asset.last_updated),
    }
    optional = {
        "note": asset.note,
        "quantity": asset.quantity,
        "buyPrice": asset.buy_price,
        "currentPrice": asset.current_price,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    return data


def asset_from_dict(data: dict[str, Any]) -> domain.Asset:
    return domain.Asset(
        id=str(data["id"]),
        name=data["name"],
        type=domain.AssetType(data["type"]),
        value=float(data["value"]),
        initial_value=float(data.get("initialValue", data["value"])),
        last_updated=parse_timestamp(data["lastUpdated"]),
        note=data.get("note"),
        quantity=_optional_float(data.get("quantity")),
        buy_price=_optional_float(data.get("buyPrice")),
        current_price=_optional_float(data.get("currentPrice")),
    )


def debt_to_dict(debt: domain.Debt) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": debt.id,
        "person": debt.person,
        "amount": debt.amount,
        "type": debt.type.value,
        "isPaid": debt.is_paid,
    }
    if debt.due_date is not None:
        data["dueDate"] = debt.due_date.isoformat()
    if debt.note is not None:
        data["note"] = debt.note
    return data


def debt_from_dict(data: dict[str, Any]) -> domain.Debt:
    return domain.Debt(
        id=str(data["id"]),
        person=data["person"],
        amount=float(data["amount"]),
        type=domain.DebtType(data["type"]),
        is_paid=bool(data.get("isPaid", False)),
        due_date=_parse_day(data.get("dueDate")),
        note=data.get("note"),
    )


def savings_goal_to_dict(goal: domain.SavingsGoal) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": goal.id,
        "name": goal.name,
        "targetAmount": goal.target_amount,
        "currentAmount": goal.current_amount,
        "deadline": goal.deadline.isoformat() if goal.deadline else "",
    }
    if goal.image is not None:
        data["image"] = goal.image
    return data


def savings_goal_from_dict(data: dict[str, Any]) -> domain.SavingsGoal:
    return domain.SavingsGoal(
        id=str(data["id"]),
        name=data["name"],
        target_amount=float(data["targetAmount"]),
        current_amount=float(data.get("currentAmount", 0)),
        deadline=_parse_day(data.get("deadline")),
        image=data.get("image"),
    )


def recurring_bill_to_dict(bill: domain.RecurringBill) -> dict[str, Any]:
    return {
        "id": bill.id,
        "name": bill.name,
        "amount": bill.amount,
        "category": bill.category,
        "dueDay": bill.due_day,
    }


def recurring_bill_from_dict(data: dict[str, Any]) -> domain.RecurringBill:
    return domain.RecurringBill(
        id=str(data["id"]),
        name=data["name"],
        amount=float(data["amount"]),
        category=str(data["category"]),
        due_day=int(data["dueDay"]),
    )


def custom_category_to_dict(category: domain.CustomCategory) -> dict[str, Any]:
    return {
        "name": category.name,
        "type": category.type.value if category.type else None,
    }


def custom_category_from_dict(data: dict[str, Any]) -> domain.CustomCategory:
    raw_type = data.get("type")
    return domain.CustomCategory(
        name=data["name"],
        type=domain.TransactionType(raw_type) if raw_type else None,
    )


def _list_codec(
    to_dict: Callable[[Any], dict[str, Any]], from_dict: Callable[[dict[str, Any]], Any]
) -> tuple[Callable[[Any], Any], Callable[[Any], Any]]:
    return (
        lambda items: [to_dict(item) for item in items],
        lambda raw: tuple(from_dict(item) for item in raw),
    )


# state field -> (encode to JSON-ready value, decode from parsed JSON)
_CODECS: dict[str, tuple[Callable[[Any], Any], Callable[[Any], Any]]] = {
    "transactions": _list_codec(transaction_to_dict, transaction_from_dict),
    "wallets": _list_codec(wallet_to_dict, wallet_from_dict),
    "budget": (lambda value: value, lambda raw: float(raw)),
    "category_budgets": (
        lambda value: dict(value),
        lambda raw: {str(key): float(limit) for key, limit in raw.items()},
    ),
    "custom_categories": _list_codec(custom_category_to_dict, custom_category_from_dict),
    "savings_goals": _list_codec(savings_goal_to_dict, savings_goal_from_dict),
    "recurring_bills": _list_codec(recurring_bill_to_dict, recurring_bill_from_dict),
    "assets": _list_codec(asset_to_dict, asset_from_dict),
    "debts": _list_codec(debt_to_dict, debt_from_dict),
    "planned_income": (lambda value: value, lambda raw: float(raw or 0)),
}


def encode_value(field_name: str, value: Any) -> Any:
    """Convert a state field to its JSON-ready form."""
    return _CODECS[field_name][0](value)


def decode_value(field_name: str, raw: Any) -> Any:
    """Convert parsed JSON back into a state field value.

    Raises:
        ValidationError: If the document does not have the expected shape
    """
    try:
        return _CODECS[field_name][1](raw)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid data for '{field_name}': {e}")


def encode_field(field_name: str, value: Any) -> str:
    """Serialize a state field to the string stored under its key."""
    return json.dumps(encode_value(field_name, value), ensure_ascii=False)


def decode_field(field_name: str, text: str) -> Any:
    """Deserialize the string stored under a state field's key.

    Raises:
        ValidationError: If the text is not valid JSON or has the wrong shape
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Malformed JSON for '{field_name}': {e}")
    return decode_value(field_name, raw)
