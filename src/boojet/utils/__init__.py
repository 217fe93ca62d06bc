"""Utility functions for boojet."""

from boojet.utils.account_resolver import resolve_account
from boojet.utils.amount_parser import parse_amount
from boojet.utils.date_parser import get_date_range, parse_date, parse_year_month

__all__ = [
    "parse_date",
    "parse_year_month",
    "get_date_range",
    "parse_amount",
    "resolve_account",
]
