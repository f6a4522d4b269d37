"""Framework-neutral API layer for moneymind."""

from moneymind.api.handlers import FinanceAPI, error_response

__all__ = ["FinanceAPI", "error_response"]
