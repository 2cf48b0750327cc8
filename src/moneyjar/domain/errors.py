"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicates or repeated settlement."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class AIUnavailableError(DomainError):
    """The generative-AI service failed or is not configured."""


AI_UNAVAILABLE_MESSAGE = "AI service unavailable, please try again later"


def entity_not_found(kind: str, entity_id: str) -> str:
    """Return message for a missing entity."""
    return f"{kind} '{entity_id}' not found"


def wallet_delete_blocked(wallet_name: str, transaction_count: int) -> str:
    """Return message when a wallet still has transactions."""
    return (
        f"Cannot delete wallet '{wallet_name}': it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}."
    )


def duplicate_category(name: str) -> str:
    """Return message for a category name that already exists."""
    return f"Category '{name}' already exists"


def debt_already_settled(person: str) -> str:
    """Return message when settling a paid debt again."""
    return f"Debt with '{person}' is already settled"
