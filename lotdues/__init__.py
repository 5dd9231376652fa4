"""Lot dues: quota, contribution and expense reconciliation for a lot community."""

__version__ = "0.1.0"
