"""Enforcement engine: tier catalog, enforcers, mode resolution and aggregation."""
