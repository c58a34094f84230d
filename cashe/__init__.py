"""Cashé: financial aggregation and reporting engine.

Takes dated, dual-currency movements and a date range, and derives period
totals, category breakdowns, comparisons with the previous period and a
projection of the next period's available margin.
"""

__version__ = "0.1.0"
