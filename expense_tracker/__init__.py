"""
Expense Tracker - Source Package

A small personal expense tracker: record what you spend each day,
set a daily target, and review daily, weekly and monthly totals.

DESIGN PRINCIPLES:
1. The expense list is append-only
2. Classification is always derived, never stored
3. Aggregation is pure and works on plain date strings
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
