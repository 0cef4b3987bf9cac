"""Shell execution and console formatting helpers."""
