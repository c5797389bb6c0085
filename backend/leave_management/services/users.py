"""Admin user management and self-service profile operations."""

import logging

from leave_management.core.enums import Role
from leave_management.core.exceptions import NotFoundError, ValidationError
from leave_management.core.security import hash_password, verify_password
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_users(self) -> list[User]:
        return await self.uow.users.list_all()

    async def get(self, user_id: int) -> User:
        user = await self.uow.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_role(self, user_id: int, role: str) -> User:
        try:
            new_role = Role(role.strip().upper())
        except ValueError:
            raise ValidationError("Role must be EMPLOYEE, MANAGER, or ADMIN")

        async with self.uow.transaction():
            user = await self.get(user_id)
            old_role = user.role
            user.role = new_role

        logger.info("User %d role changed %s -> %s", user_id, old_role, new_role.value)
        return user

    async def change_password(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
        confirm_new_password: str,
    ) -> None:
        async with self.uow.transaction():
            user = await self.get(user_id)

            if new_password != confirm_new_password:
                raise ValidationError("New passwords do not match")
            if len(new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(
                    f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            if not verify_password(current_password, user.password_hash):
                raise ValidationError("Current password is incorrect")

            user.password_hash = hash_password(new_password)

        logger.info("User %d changed their password", user_id)
