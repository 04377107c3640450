"""Ledger Insights: read-only financial reporting over a transaction ledger."""
