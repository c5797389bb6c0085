"""Registration and login."""

import logging

from leave_management.core.enums import Role
from leave_management.core.exceptions import ConflictError, UnauthorizedError
from leave_management.core.security import hash_password, verify_password
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork
from leave_management.services.balance_store import BalanceStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.balances = BalanceStore(uow.balances)

    async def register(self, name: str, email: str, password: str) -> User:
        """Create an EMPLOYEE and give them a full balance of every leave type."""
        async with self.uow.transaction():
            if await self.uow.users.get_by_email(email) is not None:
                raise ConflictError("User with this email already exists")

            user = await self.uow.users.add(
                User(
                    name=name,
                    email=email,
                    password_hash=hash_password(password),
                    role=Role.EMPLOYEE,
                )
            )
            leave_types = await self.uow.leave_types.list_all()
            await self.balances.create_for_leave_types(user.id, leave_types)

        logger.info(
            "Registered user %d with %d leave balances", user.id, len(leave_types)
        )
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.uow.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        return user
