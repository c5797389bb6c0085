from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from leave_management.core.config import settings
from leave_management.core.enums import Role
from leave_management.core.exceptions import ForbiddenError, UnauthorizedError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored hash; unusable hashes never match."""
    if not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except UnknownHashError:
        return False


def create_access_token(
    claims: dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_user_token(user) -> str:
    """Create a JWT with sub (user id), email, name and role claims."""
    return create_access_token(
        {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "role": Role(user.role).value,
        }
    )


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise UnauthorizedError("Invalid authentication credentials") from exc


def user_id_from_token(token: str) -> int:
    """Return the user id carried in ``sub``; 401 for bad or expired tokens."""
    user_id = decode_access_token(token).get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise UnauthorizedError("Invalid token payload")
    return int(user_id)


def require_role(*allowed_roles: Role):
    """Dependency factory that checks the current user has one of the allowed roles.

    Usage:
        @router.get("/admin-only", dependencies=[Depends(require_role(Role.ADMIN))])
        async def admin_endpoint(...): ...

    Or as a direct dependency:
        current_user = Depends(require_role(Role.MANAGER))
    """
    from leave_management.core.dependencies import get_current_user

    async def role_checker(current_user=Depends(get_current_user)):
        if Role(current_user.role) not in allowed_roles:
            raise ForbiddenError(
                f"Role '{Role(current_user.role).value}' is not authorized. "
                f"Required: {', '.join(r.value for r in allowed_roles)}"
            )
        return current_user

    return role_checker
