"""Indicator plugin contract, registry and built-in indicators."""
