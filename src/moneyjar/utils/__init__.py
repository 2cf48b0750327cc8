"""Utility functions for moneyjar."""
