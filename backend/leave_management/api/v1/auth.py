"""Authentication endpoints: register, login."""

from fastapi import APIRouter, Depends

from leave_management.api.v1.schemas import AuthResponse, LoginRequest, RegisterRequest
from leave_management.core.dependencies import get_uow
from leave_management.core.security import create_user_token
from leave_management.repositories import UnitOfWork
from leave_management.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user) -> AuthResponse:
    return AuthResponse(
        token=create_user_token(user),
        user_id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
    )


# ── POST /register ────────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse)
async def register(body: RegisterRequest, uow: UnitOfWork = Depends(get_uow)):
    """Create an EMPLOYEE account with full leave balances. Returns a JWT."""
    user = await AuthService(uow).register(body.name, body.email, body.password)
    return _auth_response(user)


# ── POST /login ───────────────────────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, uow: UnitOfWork = Depends(get_uow)):
    user = await AuthService(uow).login(body.email, body.password)
    return _auth_response(user)
