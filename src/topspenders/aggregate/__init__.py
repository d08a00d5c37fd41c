"""Aggregation and reporting helpers.

This package accumulates card spend per (month, user) from the transaction
stream, ranks users within each month and writes the ranked CSV report.
"""
