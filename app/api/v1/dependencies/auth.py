"""Caller identity (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.identity import CurrentUser
from app.domain.exceptions import AuthenticationException
from app.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CurrentUser:
    """Return the caller from the bearer JWT; 401 when missing or invalid."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    return verify_token(credentials.credentials)
