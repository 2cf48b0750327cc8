"""Command-line interface for moneyjar."""
