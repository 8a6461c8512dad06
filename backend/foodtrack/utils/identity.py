from uuid import UUID

from fastapi import Header, HTTPException


def get_current_user_id(x_user_id: str | None = Header(None)) -> UUID:
    """Caller identity, supplied upstream in the X-User-Id header."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid X-User-Id header")
