"""Domain model entities for moneyjar.

These are pure data classes representing business concepts, independent of
the storage format. Mappers in ``moneyjar.database.mappers`` translate them to
and from the persisted JSON documents.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction; amounts are always stored positive."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class StandardCategory(str, Enum):
    """Built-in categories. Values are the persisted labels."""

    # Essentials
    FOOD = "Ăn uống"
    TRANSPORT = "Di chuyển"
    HOUSING = "Nhà cửa"
    BILLS = "Hóa đơn & Tiện ích"
    HEALTH = "Sức khỏe"
    EDUCATION = "Giáo dục"
    GROCERIES = "Đi chợ/Siêu thị"

    # Personal / wants
    SHOPPING = "Mua sắm"
    ENTERTAINMENT = "Giải trí"
    BEAUTY = "Làm đẹp"
    TRAVEL = "Du lịch"
    GIVING = "Hiếu hỉ/Từ thiện"

    # Financial
    INSURANCE = "Bảo hiểm"
    LOAN_INTEREST = "Trả lãi vay"
    INVESTMENT_LOSS = "Lỗ đầu tư"

    # Business
    BUSINESS_COST = "Chi phí Kinh doanh"

    # Income
    SALARY = "Lương"
    BONUS = "Thưởng"
    SELLING = "Bán hàng/Kinh doanh"
    INVESTMENT_RETURN = "Lợi nhuận đầu tư"
    OTHER = "Khác"


EXPENSE_CATEGORY_GROUPS: dict[str, tuple[StandardCategory, ...]] = {
    "essentials": (
        StandardCategory.FOOD,
        StandardCategory.GROCERIES,
        StandardCategory.TRANSPORT,
        StandardCategory.HOUSING,
        StandardCategory.BILLS,
        StandardCategory.HEALTH,
    ),
    "personal": (
        StandardCategory.SHOPPING,
        StandardCategory.ENTERTAINMENT,
        StandardCategory.BEAUTY,
        StandardCategory.TRAVEL,
    ),
    "education": (StandardCategory.EDUCATION,),
    "giving": (StandardCategory.GIVING,),
    "business": (StandardCategory.BUSINESS_COST,),
    "financial": (
        StandardCategory.INSURANCE,
        StandardCategory.LOAN_INTEREST,
        StandardCategory.INVESTMENT_LOSS,
        StandardCategory.OTHER,
    ),
}

INCOME_CATEGORY_GROUPS: dict[str, tuple[StandardCategory, ...]] = {
    "primary": (StandardCategory.SALARY, StandardCategory.BONUS),
    "business": (StandardCategory.SELLING,),
    "other": (StandardCategory.INVESTMENT_RETURN, StandardCategory.OTHER),
}


# Categories written by the ledger itself when one entity changes another
SAVINGS_CATEGORY = "Tiết kiệm"
LEND_CATEGORY = "Cho vay"
BORROW_CATEGORY = "Đi vay"
COLLECT_DEBT_CATEGORY = "Thu nợ"
REPAY_DEBT_CATEGORY = "Trả nợ"
TRANSFER_FEE_CATEGORY = "Phí giao dịch"
TRANSFER_IN_CATEGORY = "Nhận tiền"
TRANSFER_OUT_CATEGORY = "Chuyển tiền"
BALANCE_ADJUSTMENT_CATEGORY = "Điều chỉnh số dư"


@dataclass(frozen=True)
class CustomCategory:
    """User-defined category, or a system label outside the standard set."""

    name: str
    type: Optional[TransactionType] = None


# A category reference is either a built-in or a custom category
CategoryRef = StandardCategory | CustomCategory


class WalletType(str, Enum):
    CASH = "CASH"
    BANK = "BANK"
    CREDIT = "CREDIT"
    E_WALLET = "E-WALLET"


class AssetType(str, Enum):
    """Asset kinds. DEBT is a liability tracked alongside assets."""

    CASH = "Tiền mặt"
    SAVINGS = "Sổ tiết kiệm"
    STOCK = "Cổ phiếu/Chứng khoán"
    CRYPTO = "Tiền mã hóa"
    REAL_ESTATE = "Bất động sản"
    GOLD = "Vàng/Bạc"
    FUND = "Chứng chỉ quỹ"
    DEBT = "Nợ/Khoản vay"
    OTHER = "Tài sản khác"


UNIT_BASED_ASSET_TYPES = frozenset(
    {AssetType.GOLD, AssetType.STOCK, AssetType.CRYPTO, AssetType.FUND}
)
LIQUID_ASSET_TYPES = frozenset({AssetType.CASH, AssetType.SAVINGS})
INVESTED_ASSET_TYPES = frozenset(
    {
        AssetType.STOCK,
        AssetType.CRYPTO,
        AssetType.REAL_ESTATE,
        AssetType.GOLD,
        AssetType.FUND,
    }
)


class DebtType(str, Enum):
    LEND = "LEND"
    BORROW = "BORROW"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity. ``amount`` is always positive."""

    id: str
    amount: float
    type: TransactionType
    category: str
    date: datetime
    note: str = ""
    wallet_id: Optional[str] = None
    recurring_bill_id: Optional[str] = None

    @property
    def month(self) -> str:
        return self.date.strftime("%Y-%m")


@dataclass(frozen=True)
class Wallet:
    """Wallet (cash, bank account, credit card or e-wallet)."""

    id: str
    name: str
    type: WalletType
    initial_balance: float
    current_balance: float
    credit_limit: Optional[float] = None
    account_number: Optional[str] = None
    bank_name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Asset:
    """Asset or liability held by the user."""

    id: str
    name: str
    type: AssetType
    value: float
    initial_value: float
    last_updated: datetime
    note: Optional[str] = None
    quantity: Optional[float] = None
    buy_price: Optional[float] = None
    current_price: Optional[float] = None


@dataclass(frozen=True)
class Debt:
    """Money lent to or borrowed from a person."""

    id: str
    person: str
    amount: float
    type: DebtType
    is_paid: bool = False
    due_date: Optional[date] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[date] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class RecurringBill:
    id: str
    name: str
    amount: float
    category: str
    due_day: int


DEFAULT_WALLET = Wallet(
    id="w1",
    name="Tiền mặt",
    type=WalletType.CASH,
    initial_balance=0.0,
    current_balance=0.0,
)


@dataclass(frozen=True)
class AppState:
    """Whole application state. Replaced as a unit on every change."""

    transactions: tuple[Transaction, ...] = ()
    wallets: tuple[Wallet, ...] = (DEFAULT_WALLET,)
    budget: float = 0.0
    category_budgets: dict[str, float] = field(default_factory=dict)
    custom_categories: tuple[CustomCategory, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()
    recurring_bills: tuple[RecurringBill, ...] = ()
    assets: tuple[Asset, ...] = ()
    debts: tuple[Debt, ...] = ()
    planned_income: float = 0.0
