# tradetracker/__init__.py
"""Skin trade tracker: weighted-average-cost inventory, trade ledger and portfolio statistics."""

__version__ = "1.0.0"
