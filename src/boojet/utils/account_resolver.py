"""Utility for resolving account names to IDs."""

from boojet.domain.account import AccountService
from boojet.domain.entities import DEFAULT_OWNER_ID
from boojet.domain.errors import ReferenceNotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    A value that looks like a number is treated as an ID; anything else is
    matched against account names.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ReferenceNotFoundError: If account is not found
    """
    if isinstance(account, int):
        return account_service.require_account(account).id

    text = account.strip()
    if text.isdigit():
        return account_service.require_account(int(text)).id

    found = account_service.db.get_account_by_name(text, DEFAULT_OWNER_ID)
    if found is None:
        raise ReferenceNotFoundError(f"Account '{text}' not found")
    return found.id
