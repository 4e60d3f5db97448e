"""Minimal auth dependency.

Stub implementation that takes the user ID from a bearer token or falls back
to the dev user. There is no credential check.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

from tripflow.db.context import RequestContext
from tripflow.db.seed_dev import DEV_USER_ID


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from authorization header.

    - No header: the dev user that owns the demo trip
    - "Bearer <user_id>": that user

    Args:
        authorization: Authorization header (e.g., "Bearer <user_id>")

    Returns:
        RequestContext with user_id

    Raises:
        HTTPException: If authorization is invalid
    """
    if not authorization:
        return RequestContext(user_id=DEV_USER_ID)

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = authorization[7:].strip()  # Strip "Bearer "
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Empty bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return RequestContext(user_id=user_id)
