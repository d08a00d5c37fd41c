"""topspenders package.

Contains modules for decoding a CSV export of customer transactions,
validating each record, aggregating card spend per calendar month and
writing a ranked report of the top spenders.

Architecture:
- Decode → Validate → Aggregate → Rank → Write, one pass over the input
- A producer thread hands rows to the aggregator through a one-slot queue
- Pydantic models validate decoded and typed transactions
- pandas builds the ranking and serializes the CSV report
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
