"""Shared pytest fixtures for moneyjar tests."""

import os
import tempfile

import pytest

from moneyjar.database.factories import create_sqlite_storage
from moneyjar.domain.asset import AssetService
from moneyjar.domain.bills import BillService
from moneyjar.domain.budget import BudgetService
from moneyjar.domain.category import CategoryService
from moneyjar.domain.debt import DebtService
from moneyjar.domain.entities import WalletType
from moneyjar.domain.savings import SavingsService
from moneyjar.domain.state import StateStore
from moneyjar.domain.transaction import TransactionService
from moneyjar.domain.wallet import WalletService


@pytest.fixture
def temp_db():
    """Create a temporary storage for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    storage = create_sqlite_storage(database_path=db_path)
    # Store the path for tests that need it
    storage.database_path = db_path
    storage.connect()
    storage.initialize_schema()

    yield storage

    # Cleanup
    storage.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store(temp_db):
    """Create a StateStore over the temporary storage."""
    return StateStore(temp_db)


@pytest.fixture
def reopen(temp_db):
    """Return a function that loads the persisted state through a fresh connection."""

    def _reopen():
        storage = create_sqlite_storage(database_path=temp_db.database_path)
        try:
            return StateStore(storage).state
        finally:
            storage.disconnect()

    return _reopen


@pytest.fixture
def transaction_service(store):
    return TransactionService(store)


@pytest.fixture
def wallet_service(store):
    return WalletService(store)


@pytest.fixture
def category_service(store):
    return CategoryService(store)


@pytest.fixture
def budget_service(store):
    return BudgetService(store)


@pytest.fixture
def savings_service(store):
    return SavingsService(store)


@pytest.fixture
def bill_service(store):
    return BillService(store)


@pytest.fixture
def asset_service(store):
    return AssetService(store)


@pytest.fixture
def debt_service(store):
    return DebtService(store)


@pytest.fixture
def bank_wallet(wallet_service):
    """Create a bank wallet next to the default cash wallet."""
    return wallet_service.create_wallet(name="Vietcombank", type=WalletType.BANK)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
