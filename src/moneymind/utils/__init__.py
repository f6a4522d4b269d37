"""Utility functions for moneymind."""

from moneymind.utils.date_parser import parse_date
from moneymind.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
