"""Owner resolution for request-scoped report context.

Token verification happens upstream; by the time a request reaches this
service the caller's profile id travels in the ``X-User-Id`` header.
"""

from typing import Annotated

from fastapi import Header

from ledger_insights.utils import raise_unauthorized

OWNER_HEADER = "X-User-Id"


async def get_current_owner_id(
    x_user_id: Annotated[str | None, Header(alias=OWNER_HEADER)] = None,
) -> str:
    """Resolve the current owner (profile) id from the request header."""
    if x_user_id is None or not x_user_id.strip():
        raise_unauthorized("Missing owner id")
    return x_user_id.strip()
