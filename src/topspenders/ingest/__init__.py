"""Ingestion helpers for the pipeline.

Decodes CSV rows into typed records and streams them to the aggregator one at
a time through a producer thread.
"""
