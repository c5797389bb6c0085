from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.core.database import async_session_factory
from leave_management.core.exceptions import UnauthorizedError
from leave_management.core.security import user_id_from_token
from leave_management.repositories import UnitOfWork

security_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    uow: UnitOfWork = Depends(get_uow),
):
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    user = await uow.users.get(user_id_from_token(credentials.credentials))
    if user is None:
        raise UnauthorizedError("User not found")

    return user
