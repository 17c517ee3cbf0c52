"""Consolidate per-book meta.json files into a single index."""
