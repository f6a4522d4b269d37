"""CLI layer for moneymind."""
