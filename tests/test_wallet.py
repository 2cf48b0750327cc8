"""Tests for WalletService."""

import pytest

from moneyjar.domain.entities import (
    BALANCE_ADJUSTMENT_CATEGORY,
    TRANSFER_FEE_CATEGORY,
    TRANSFER_IN_CATEGORY,
    TRANSFER_OUT_CATEGORY,
    TransactionType,
    WalletType,
)
from moneyjar.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError


def test_default_wallet(wallet_service):
    """Test that a fresh ledger has one cash wallet."""
    wallets = wallet_service.list_wallets()

    assert len(wallets) == 1
    assert wallets[0].id == "w1"
    assert wallets[0].type == WalletType.CASH


def test_create_wallet(wallet_service, reopen):
    """Test creating and persisting a wallet."""
    wallet = wallet_service.create_wallet(
        name="Visa",
        type=WalletType.CREDIT,
        initial_balance=0,
        credit_limit=50_000_000,
        bank_name="Techcombank",
    )

    assert wallet.current_balance == 0
    persisted = {w.id: w for w in reopen().wallets}
    assert persisted[wallet.id] == wallet


def test_create_duplicate_wallet(wallet_service):
    """Test that wallet names are unique."""
    with pytest.raises(ConflictError):
        wallet_service.create_wallet(name="Tiền mặt", type=WalletType.CASH)


def test_rename_wallet(wallet_service, bank_wallet):
    """Test renaming a wallet."""
    updated = wallet_service.update_wallet(bank_wallet.id, name="VCB")
    assert wallet_service.get_wallet(bank_wallet.id).name == "VCB"
    assert updated.type == WalletType.BANK


def test_rename_onto_existing_name(wallet_service, bank_wallet):
    """Test that renaming cannot create a duplicate."""
    with pytest.raises(ConflictError):
        wallet_service.update_wallet(bank_wallet.id, name="Tiền mặt")


def test_update_missing_wallet(wallet_service):
    """Test updating a wallet that doesn't exist."""
    with pytest.raises(NotFoundError):
        wallet_service.update_wallet("missing", name="x")


def test_delete_unused_wallet(wallet_service, bank_wallet):
    """Test deleting a wallet without transactions."""
    wallet_service.delete_wallet(bank_wallet.id)
    assert wallet_service.get_wallet(bank_wallet.id) is None


def test_delete_wallet_with_transactions(wallet_service, transaction_service, bank_wallet):
    """Test that wallets referenced by transactions cannot be deleted."""
    transaction_service.add_transaction(
        1_000, TransactionType.EXPENSE, "Ăn uống", wallet_id=bank_wallet.id
    )

    with pytest.raises(DependencyError, match="it has 1 transaction\\."):
        wallet_service.delete_wallet(bank_wallet.id)


def test_calculate_balance(wallet_service, transaction_service):
    """Test that balance is the initial balance plus net transactions."""
    wallet = wallet_service.create_wallet(name="Momo", type=WalletType.E_WALLET, initial_balance=500_000)
    transaction_service.add_transaction(200_000, TransactionType.INCOME, "Khác", wallet_id=wallet.id)
    transaction_service.add_transaction(50_000, TransactionType.EXPENSE, "Ăn uống", wallet_id=wallet.id)
    transaction_service.add_transaction(99_000, TransactionType.EXPENSE, "Ăn uống")

    assert wallet_service.calculate_balance(wallet) == 650_000
    assert wallet_service.total_wealth() == 650_000 - 99_000


def test_refresh_balances(wallet_service, transaction_service, reopen):
    """Test writing computed balances back into wallets."""
    transaction_service.add_transaction(300_000, TransactionType.INCOME, "Khác")

    wallet_service.refresh_balances()

    assert reopen().wallets[0].current_balance == 300_000


def test_credit_usage(wallet_service, transaction_service):
    """Test credit card utilisation."""
    card = wallet_service.create_wallet(name="Visa", type=WalletType.CREDIT, credit_limit=10_000_000)
    transaction_service.add_transaction(2_500_000, TransactionType.EXPENSE, "Mua sắm", wallet_id=card.id)

    assert wallet_service.credit_usage_percent(card) == pytest.approx(25)
    assert wallet_service.credit_usage_percent(wallet_service.get_wallet("w1")) == 0


class TestTransfer:
    """Tests for moving money between wallets."""

    def test_transfer(self, wallet_service, bank_wallet):
        """Test that a transfer books an expense and an income."""
        created = wallet_service.transfer("w1", bank_wallet.id, 2_000_000, note="gửi")

        assert len(created) == 2
        out, incoming = created
        assert out.type == TransactionType.EXPENSE
        assert out.category == TRANSFER_OUT_CATEGORY
        assert out.wallet_id == "w1"
        assert out.note == "Chuyển đến Vietcombank: gửi"
        assert incoming.type == TransactionType.INCOME
        assert incoming.category == TRANSFER_IN_CATEGORY
        assert incoming.wallet_id == bank_wallet.id
        assert incoming.note == "Nhận từ Tiền mặt: gửi"

        assert wallet_service.calculate_balance(wallet_service.get_wallet("w1")) == -2_000_000
        assert wallet_service.calculate_balance(bank_wallet) == 2_000_000
        assert wallet_service.total_wealth() == 0

    def test_transfer_with_fee(self, wallet_service, bank_wallet):
        """Test that a fee is a separate expense on the source wallet."""
        created = wallet_service.transfer("w1", bank_wallet.id, 1_000_000, fee=3_300)

        assert len(created) == 3
        fee = created[1]
        assert fee.category == TRANSFER_FEE_CATEGORY
        assert fee.amount == 3_300
        assert fee.wallet_id == "w1"
        assert wallet_service.total_wealth() == -3_300

    def test_same_wallet(self, wallet_service):
        """Test that transfers need two different wallets."""
        with pytest.raises(ValidationError):
            wallet_service.transfer("w1", "w1", 1_000)

    def test_non_positive_amount(self, wallet_service, bank_wallet):
        """Test that transfer amounts must be positive."""
        with pytest.raises(ValidationError):
            wallet_service.transfer("w1", bank_wallet.id, 0)

    def test_missing_wallet(self, wallet_service):
        """Test transferring to an unknown wallet."""
        with pytest.raises(NotFoundError):
            wallet_service.transfer("w1", "missing", 1_000)


class TestAdjustBalance:
    """Tests for reconciling a wallet with its real balance."""

    def test_adjust_up(self, wallet_service):
        """Test booking a surplus as income."""
        txn = wallet_service.adjust_balance("w1", 150_000)

        assert txn.type == TransactionType.INCOME
        assert txn.amount == 150_000
        assert txn.category == BALANCE_ADJUSTMENT_CATEGORY
        assert wallet_service.calculate_balance(wallet_service.get_wallet("w1")) == 150_000

    def test_adjust_down(self, wallet_service, transaction_service):
        """Test booking a shortfall as expense."""
        transaction_service.add_transaction(100_000, TransactionType.INCOME, "Khác")

        txn = wallet_service.adjust_balance("w1", 40_000)

        assert txn.type == TransactionType.EXPENSE
        assert txn.amount == 60_000

    def test_no_difference(self, wallet_service):
        """Test that matching balances book nothing."""
        assert wallet_service.adjust_balance("w1", 0) is None
        assert wallet_service.store.state.transactions == ()
