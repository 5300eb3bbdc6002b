from fastapi import Header, HTTPException, Request, status
from sentry_sdk import set_tag, set_user

from .config import get_settings
from .session.registry import SessionRegistry


async def get_current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    """Extract the caller id set by the upstream gateway."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-Id header required")
    set_user({"id": str(x_user_id)})
    set_tag("service", get_settings().SERVICE_NAME)
    return x_user_id


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.session_registry
