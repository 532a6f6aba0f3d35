"""Shared FastAPI dependencies: remote client, category cache, auth, rate limiting."""

import secrets
from typing import List, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings
from app.services.category_tree import CategoryUrlCache
from app.services.http_client import CommerceClient

RATE_LIMIT = "300/minute"

limiter = Limiter(key_func=get_remote_address)

_basic = HTTPBasic(auto_error=False)


def get_client(request: Request) -> CommerceClient:
    return request.app.state.client


def get_cache(request: Request) -> CategoryUrlCache:
    return request.app.state.category_cache


def require_bridge_auth(credentials: Optional[HTTPBasicCredentials] = Depends(_basic)) -> None:
    """Check HTTP Basic credentials when bridge credentials are configured."""
    settings = get_settings()
    if not settings.bridge_username:
        return
    if credentials is None or not (
        secrets.compare_digest(credentials.username, settings.bridge_username)
        and secrets.compare_digest(credentials.password, settings.bridge_password)
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
            headers={"WWW-Authenticate": "Basic"},
        )


def split_ids(ids: str) -> List[str]:
    """Split a comma-separated id path segment, ignoring blanks."""
    return [i.strip() for i in ids.split(",") if i.strip()]
