"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from ledger_insights.deps import CurrentOwnerId, Gateway

    async def my_endpoint(gateway: Gateway, owner_id: CurrentOwnerId):
        # gateway is a LedgerGateway bound to the request's session maker
        # owner_id is the caller's profile id
        ...
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_insights.auth import get_current_owner_id
from ledger_insights.database import get_db, get_session_maker
from ledger_insights.services.gateway import LedgerGateway, SqlLedgerGateway


def get_ledger_gateway() -> LedgerGateway:
    return SqlLedgerGateway(get_session_maker())


DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentOwnerId = Annotated[str, Depends(get_current_owner_id)]
Gateway = Annotated[LedgerGateway, Depends(get_ledger_gateway)]

__all__ = ["CurrentOwnerId", "DbSession", "Gateway", "get_ledger_gateway"]
