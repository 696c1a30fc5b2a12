from datetime import datetime
from typing import Callable, Optional
from fastapi import Header, HTTPException, status

Clock = Callable[[], datetime]


async def get_owner_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """The caller's user id, sent by the fronting auth layer in X-User-Id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()


def get_clock() -> Clock:
    """Source of "now" for status and alert calculations; overridden in tests."""
    return datetime.now
