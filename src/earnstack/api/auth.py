"""Bearer-token authentication and role checks.

Tokens carry only the caller's email (``sub``). The role is always read back
from the users table, so a role change made by an admin takes effect on the
caller's next request without reissuing tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.deps import get_db_session
from earnstack.config import get_settings
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import AuthorizationError
from earnstack.infrastructure.database.repositories import UserRepository
from earnstack.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""

    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def create_access_token(email: str) -> str:
    """Issue a signed token for ``email``."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expire_days)
    return jwt.encode(
        {"sub": email, "exp": expire},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict | None:
    """Decode and validate a token. Expired or tampered tokens yield None."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
) -> Identity:
    """Resolve the bearer token to a registered user."""
    if credentials is None:
        raise _unauthorized("Unauthorized access")

    payload = decode_token(credentials.credentials)
    email = payload.get("sub") if payload else None
    if not email:
        raise _unauthorized("Unauthorized access")

    user = await UserRepository(session).get_by_email(email)
    if user is None:
        logger.warning("auth.unknown_user", email=email)
        raise _unauthorized("Unauthorized access")

    return Identity(email=user.email, role=UserRole(user.role))


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[Identity]]:
    """Build a dependency admitting only callers whose stored role is in ``roles``."""
    allowed = frozenset(roles)

    async def _check(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            logger.warning(
                "auth.role_denied",
                email=identity.email,
                role=identity.role.value,
                allowed=sorted(r.value for r in allowed),
            )
            raise AuthorizationError()
        return identity

    return _check


def ensure_self(identity: Identity, email: str | None) -> None:
    """Reject acting on another user's data. Admins may act on anyone's."""
    if identity.is_admin:
        return
    if email is None or email != identity.email:
        raise AuthorizationError()
