"""Bearer token issue and verification (python-jose).

The subject claim (``sub``) is the member uid; it is trusted as the caller
identity recorded on workflow executions and checked for notification roles.
"""

from datetime import timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from app.application.dtos.identity import CurrentUser
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.shared.utils.datetime import utc_now


def create_access_token(
    subject: str,
    extra_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Return a signed token for subject.

    Args:
        subject: Member uid placed in the ``sub`` claim.
        extra_claims: Additional claims (e.g. email).
        expires_delta: TTL; defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**(extra_claims or {}), "sub": subject, "exp": utc_now() + ttl}
    return cast(
        str,
        jwt.encode(claims, settings.secret_key.get_secret_value(), algorithm=settings.algorithm),
    )


def verify_token(token: str) -> CurrentUser:
    """Decode and verify a token.

    Raises:
        AuthenticationException: bad signature, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except ExpiredSignatureError as e:
        raise AuthenticationException("Token has expired") from e
    except JWTError as e:
        raise AuthenticationException("Invalid token") from e
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise AuthenticationException("Token missing required claim: sub")
    return CurrentUser(uid=subject, claims=payload)
