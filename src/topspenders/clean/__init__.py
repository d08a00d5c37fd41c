"""Validation of decoded transactions against the known enumerations."""
