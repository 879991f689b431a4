"""
Merchant Ledger - Source Package

A small single-user bookkeeping dashboard for online merchants:
record income and expense entries against a fixed chart of accounts,
and look at them through windowed totals, day-by-day bar charts and
current-month composition charts.

DESIGN PRINCIPLES:
1. The store is the single source of truth; every view is derived on demand
2. Mutations only through add / update / remove
3. Best effort on input: bad spreadsheet rows are skipped and reported
4. Aggregations are pure functions of (transactions, window, now)
"""

__version__ = "1.0.0"
__author__ = "Merchant Ledger Team"
