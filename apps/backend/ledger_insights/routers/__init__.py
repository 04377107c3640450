"""API routers package."""

from ledger_insights.routers import reports

__all__ = ["reports"]
