"""Category domain service."""

from typing import Optional

from moneyjar.domain.entities import (
    EXPENSE_CATEGORY_GROUPS,
    INCOME_CATEGORY_GROUPS,
    CategoryRef,
    CustomCategory,
    StandardCategory,
    TransactionType,
)
from moneyjar.domain.errors import ConflictError, ValidationError, duplicate_category
from moneyjar.domain.state import StateStore
from moneyjar.utils.logger import get_logger

logger = get_logger(__name__)


def standard_categories(type: Optional[TransactionType] = None) -> list[StandardCategory]:
    """Built-in categories for a transaction type, in display order."""
    groups = []
    if type in (None, TransactionType.EXPENSE):
        groups.extend(EXPENSE_CATEGORY_GROUPS.values())
    if type in (None, TransactionType.INCOME):
        groups.extend(INCOME_CATEGORY_GROUPS.values())

    result: list[StandardCategory] = []
    for group in groups:
        for category in group:
            if category not in result:
                result.append(category)
    return result


def category_name(category: CategoryRef) -> str:
    """Return the persisted label of a category reference."""
    if isinstance(category, StandardCategory):
        return category.value
    return category.name


class CategoryService:
    """Service for resolving and managing categories."""

    def __init__(self, store: StateStore):
        """Initialize category service.

        Args:
            store: StateStore instance
        """
        self.store = store

    def resolve(self, name: str) -> CategoryRef:
        """Look up a category by label or standard enum name.

        Labels outside the standard and custom sets (such as the system
        categories written by savings and debts) resolve to an ad-hoc
        CustomCategory.
        """
        try:
            return StandardCategory(name)
        except ValueError:
            pass
        if name.upper() in StandardCategory.__members__:
            return StandardCategory[name.upper()]
        for custom in self.store.state.custom_categories:
            if custom.name == name:
                return custom
        return CustomCategory(name=name)

    def is_known(self, name: str) -> bool:
        return any(c.value == name for c in StandardCategory) or any(
            c.name == name for c in self.store.state.custom_categories
        )

    def add_custom_category(
        self, name: str, type: Optional[TransactionType] = None
    ) -> CustomCategory:
        """Add a user-defined category.

        Args:
            name: Category label
            type: Transaction type the category belongs to, or None for both

        Returns:
            The created category

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the name matches a standard or custom category
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        if self.is_known(name):
            raise ConflictError(duplicate_category(name))

        category = CustomCategory(name=name, type=type)
        self.store.commit(
            custom_categories=self.store.state.custom_categories + (category,)
        )
        logger.info("Added custom category '%s'", name)
        return category

    def delete_custom_category(self, name: str) -> None:
        """Remove a user-defined category. Existing transactions keep their label."""
        remaining = tuple(c for c in self.store.state.custom_categories if c.name != name)
        if len(remaining) == len(self.store.state.custom_categories):
            raise ValidationError(f"Custom category '{name}' not found")
        self.store.commit(custom_categories=remaining)
        logger.info("Deleted custom category '%s'", name)

    def list_categories(self, type: Optional[TransactionType] = None) -> list[CategoryRef]:
        """Standard then custom categories available for a transaction type."""
        customs = [
            c
            for c in self.store.state.custom_categories
            if type is None or c.type is None or c.type == type
        ]
        return [*standard_categories(type), *customs]
