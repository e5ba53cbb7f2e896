"""Aggregated and drill-down reports."""
