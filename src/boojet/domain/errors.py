"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class InvalidInputError(DomainError):
    """A value violates a structural or business invariant."""


class InvalidAmountError(InvalidInputError):
    """A monetary value cannot be parsed as an exact decimal."""


class ReferenceNotFoundError(DomainError):
    """A referenced account, category, transaction or income plan does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def income_plan_not_found(plan_id: int) -> str:
    """Return message for missing income plan."""
    return f"Income plan {plan_id} not found"


def category_not_found(code: str) -> str:
    """Return message for missing category by code."""
    return f"Category '{code}' not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name already used by the owner."""
    return f"Account with name '{name}' already exists"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account still has transactions."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )


def invalid_field(field: str, reason: str) -> str:
    """Return message for a field that failed validation."""
    return f"Invalid {field}: {reason}"
