"""Wallet domain service."""

from dataclasses import replace
from typing import Optional

from moneyjar.domain.entities import (
    BALANCE_ADJUSTMENT_CATEGORY,
    TRANSFER_FEE_CATEGORY,
    TRANSFER_IN_CATEGORY,
    TRANSFER_OUT_CATEGORY,
    Transaction,
    TransactionType,
    Wallet,
    WalletType,
)
from moneyjar.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    entity_not_found,
    wallet_delete_blocked,
)
from moneyjar.domain.state import StateStore, new_id
from moneyjar.domain.transaction import TransactionService
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


class WalletService:
    """Service for managing wallets and their balances."""

    def __init__(self, store: StateStore):
        """Initialize wallet service.

        Args:
            store: StateStore instance
        """
        self.store = store
        self.transactions = TransactionService(store)

    def create_wallet(
        self,
        name: str,
        type: WalletType,
        initial_balance: float = 0.0,
        credit_limit: Optional[float] = None,
        account_number: Optional[str] = None,
        bank_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Wallet:
        """Create a new wallet.

        Raises:
            ConflictError: If a wallet with the same name exists
        """
        wallets = self.store.state.wallets
        if any(w.name == name for w in wallets):
            raise ConflictError(f"Wallet with name '{name}' already exists")

        wallet = Wallet(
            id=new_id(),
            name=name,
            type=type,
            initial_balance=initial_balance,
            current_balance=initial_balance,
            credit_limit=credit_limit,
            account_number=account_number,
            bank_name=bank_name,
            description=description,
        )
        self.store.commit(wallets=wallets + (wallet,))
        logger.info("Created wallet %s (%s)", wallet.id, name)
        return wallet

    def get_wallet(self, wallet_id: str) -> Optional[Wallet]:
        for wallet in self.store.state.wallets:
            if wallet.id == wallet_id:
                return wallet
        return None

    def list_wallets(self) -> list[Wallet]:
        return list(self.store.state.wallets)

    def update_wallet(self, wallet_id: str, **changes) -> Wallet:
        """Replace fields of a wallet.

        Raises:
            NotFoundError: If the wallet doesn't exist
            ConflictError: If renaming onto another wallet's name
        """
        wallet = self.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError(entity_not_found("Wallet", wallet_id))

        new_name = changes.get("name")
        if new_name is not None and any(
            w.id != wallet_id and w.name == new_name for w in self.store.state.wallets
        ):
            raise ConflictError(f"Wallet with name '{new_name}' already exists")

        updated = replace(wallet, **changes)
        self.store.commit(
            wallets=tuple(updated if w.id == wallet_id else w for w in self.store.state.wallets)
        )
        logger.info("Updated wallet %s", wallet_id)
        return updated

    def delete_wallet(self, wallet_id: str) -> None:
        """Delete a wallet that no transaction references.

        Raises:
            NotFoundError: If the wallet doesn't exist
            DependencyError: If transactions are booked against it
        """
        wallet = self.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError(entity_not_found("Wallet", wallet_id))

        count = sum(1 for t in self.store.state.transactions if t.wallet_id == wallet_id)
        if count > 0:
            raise DependencyError(wallet_delete_blocked(wallet.name, count))

        self.store.commit(
            wallets=tuple(w for w in self.store.state.wallets if w.id != wallet_id)
        )
        logger.info("Deleted wallet %s", wallet_id)

    def calculate_balance(self, wallet: Wallet) -> float:
        """Initial balance plus the net of every transaction booked to the wallet."""
        balance = wallet.initial_balance
        for txn in self.store.state.transactions:
            if txn.wallet_id != wallet.id:
                continue
            if txn.type == TransactionType.INCOME:
                balance += txn.amount
            else:
                balance -= txn.amount
        return balance

    def refresh_balances(self) -> list[Wallet]:
        """Write the computed balance back into each wallet's current_balance."""
        refreshed = tuple(
            replace(w, current_balance=self.calculate_balance(w)) for w in self.store.state.wallets
        )
        self.store.commit(wallets=refreshed)
        return list(refreshed)

    def total_wealth(self) -> float:
        """Sum of computed balances across all wallets."""
        return sum(self.calculate_balance(w) for w in self.store.state.wallets)

    def credit_usage_percent(self, wallet: Wallet) -> float:
        """Share of a credit card's limit in use, 0 when there is no limit."""
        limit = wallet.credit_limit or 0
        if limit <= 0:
            return 0.0
        return abs(self.calculate_balance(wallet)) / limit * 100

    def transfer(
        self,
        from_wallet_id: str,
        to_wallet_id: str,
        amount: float,
        fee: float = 0.0,
        note: str = "",
    ) -> list[Transaction]:
        """Move money between wallets as a pair of transactions.

        A non-zero fee is booked as a separate expense on the source wallet.

        Raises:
            NotFoundError: If either wallet doesn't exist
            ValidationError: If source and destination are the same or amount is not positive
        """
        source = self.get_wallet(from_wallet_id)
        if source is None:
            raise NotFoundError(entity_not_found("Wallet", from_wallet_id))
        destination = self.get_wallet(to_wallet_id)
        if destination is None:
            raise NotFoundError(entity_not_found("Wallet", to_wallet_id))
        if source.id == destination.id:
            raise ValidationError("Cannot transfer to the same wallet")
        if amount <= 0:
            raise ValidationError("Transfer amount must be positive")

        created = [
            self.transactions.build_transaction(
                amount=amount,
                type=TransactionType.EXPENSE,
                category=TRANSFER_OUT_CATEGORY,
                note=f"Chuyển đến {destination.name}: {note}",
                wallet_id=source.id,
            )
        ]
        if fee > 0:
            created.append(
                self.transactions.build_transaction(
                    amount=fee,
                    type=TransactionType.EXPENSE,
                    category=TRANSFER_FEE_CATEGORY,
                    note=f"Phí chuyển tiền đến {destination.name}",
                    wallet_id=source.id,
                )
            )
        created.append(
            self.transactions.build_transaction(
                amount=amount,
                type=TransactionType.INCOME,
                category=TRANSFER_IN_CATEGORY,
                note=f"Nhận từ {source.name}: {note}",
                wallet_id=destination.id,
            )
        )
        self.store.commit(transactions=self.transactions.prepend(*reversed(created)))
        logger.info("Transferred %s from %s to %s", amount, source.id, destination.id)
        return created

    def adjust_balance(self, wallet_id: str, actual_balance: float) -> Optional[Transaction]:
        """Book the difference between the computed and the real balance.

        Returns:
            The adjustment transaction, or None if the balances already agree
        """
        wallet = self.get_wallet(wallet_id)
        if wallet is None:
            raise NotFoundError(entity_not_found("Wallet", wallet_id))

        diff = actual_balance - self.calculate_balance(wallet)
        if diff == 0:
            return None
        return self.transactions.add_transaction(
            amount=abs(diff),
            type=TransactionType.INCOME if diff > 0 else TransactionType.EXPENSE,
            category=BALANCE_ADJUSTMENT_CATEGORY,
            note="Cân bằng số dư thực tế",
            wallet_id=wallet.id,
        )
