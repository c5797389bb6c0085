"""Pydantic schemas for auth, admin, profile and system settings endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from leave_management.core.enums import Role


# ── Auth Schemas ──────────────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    email: str
    role: Role


# ── Admin Schemas ─────────────────────────────────────────────────────────────


class UserListItem(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    model_config = {"from_attributes": True}


class UpdateRoleRequest(BaseModel):
    role: str = Field(..., min_length=1, description="EMPLOYEE, MANAGER or ADMIN")


class MessageResponse(BaseModel):
    message: str


# ── Profile Schemas ───────────────────────────────────────────────────────────


class ProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    confirm_new_password: str


class PasswordChangeResponse(BaseModel):
    success: bool
    message: str


# ── System Settings Schemas ──────────────────────────────────────────────────


class SystemSettingItem(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., max_length=500)

    model_config = {"from_attributes": True}


class UpdateSystemSettingsRequest(BaseModel):
    settings: list[SystemSettingItem] = Field(..., min_length=1)
