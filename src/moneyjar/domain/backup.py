"""Export and import of the ledger.

CSV export is a spreadsheet-friendly view of the transactions. JSON backup
carries the whole state in the same camelCase layout as the stored keys and
restores it in one write.
"""

import csv
import io
import json
from datetime import datetime, tzinfo, UTC
from typing import Any, Optional

from moneyjar.database.mappers import (
    ASSETS_KEY,
    BUDGET_KEY,
    CATEGORY_BUDGETS_KEY,
    CUSTOM_CATEGORIES_KEY,
    DEBTS_KEY,
    RECURRING_BILLS_KEY,
    SAVINGS_GOALS_KEY,
    TRANSACTIONS_KEY,
    WALLETS_KEY,
    decode_value,
    encode_value,
    format_timestamp,
)
from moneyjar.domain.entities import AppState, TransactionType
from moneyjar.domain.errors import ValidationError
from moneyjar.domain.state import StateStore
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)

CSV_HEADERS = (
    "Ngày",
    "Giờ",
    "Loại giao dịch",
    "Danh mục",
    "Số tiền (VND)",
    "Tài khoản/Ví",
    "Ghi chú",
)
UNKNOWN_WALLET = "Không xác định"
UTF8_BOM = "\ufeff"

# backup document key -> state field
BACKUP_FIELDS = {
    TRANSACTIONS_KEY: "transactions",
    WALLETS_KEY: "wallets",
    BUDGET_KEY: "budget",
    CATEGORY_BUDGETS_KEY: "category_budgets",
    SAVINGS_GOALS_KEY: "savings_goals",
    RECURRING_BILLS_KEY: "recurring_bills",
    ASSETS_KEY: "assets",
    DEBTS_KEY: "debts",
    CUSTOM_CATEGORIES_KEY: "custom_categories",
    "monthlyIncome": "planned_income",
}
REQUIRED_BACKUP_KEYS = (TRANSACTIONS_KEY, WALLETS_KEY)


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def export_csv(state: AppState, tz: Optional[tzinfo] = None) -> str:
    """Render transactions as CSV text, BOM first.

    Args:
        state: Application state
        tz: Timezone for the date and time columns (defaults to local time)
    """
    wallet_names = {w.id: w.name for w in state.wallets}
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for txn in state.transactions:
        when = txn.date.astimezone(tz)
        writer.writerow(
            [
                when.strftime("%d/%m/%Y"),
                when.strftime("%H:%M"),
                "Thu nhập" if txn.type == TransactionType.INCOME else "Chi tiêu",
                txn.category,
                _format_amount(txn.amount),
                wallet_names.get(txn.wallet_id, UNKNOWN_WALLET),
                txn.note,
            ]
        )
    return UTF8_BOM + buffer.getvalue()


def export_json(state: AppState, now: Optional[datetime] = None) -> str:
    """Serialize the whole state as a backup document."""
    document: dict[str, Any] = {
        key: encode_value(field_name, getattr(state, field_name))
        for key, field_name in BACKUP_FIELDS.items()
    }
    document["exportDate"] = format_timestamp(now or datetime.now(UTC))
    return json.dumps(document, ensure_ascii=False, indent=2)


def parse_backup(text: str) -> dict[str, Any]:
    """Parse and validate a backup document into state field values.

    Raises:
        ValidationError: If the document is not JSON, lacks transactions or
            wallets, or any collection has the wrong shape
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Backup is not valid JSON: {e}")
    if not isinstance(document, dict):
        raise ValidationError("Backup must be a JSON object")

    missing = [key for key in REQUIRED_BACKUP_KEYS if document.get(key) is None]
    if missing:
        raise ValidationError(f"Backup is missing {', '.join(missing)}")

    changes = {}
    for key, field_name in BACKUP_FIELDS.items():
        raw = document.get(key)
        if raw is None:
            continue
        changes[field_name] = decode_value(field_name, raw)
    return changes


def import_json(store: StateStore, text: str) -> list[str]:
    """Replace persisted state with a backup.

    Every collection is validated before anything is written; the write
    itself is a single commit.

    Returns:
        The state fields that were restored
    """
    changes = parse_backup(text)
    store.commit(**changes)
    logger.info("Restored backup with %s", ", ".join(sorted(changes)))
    return sorted(changes)
