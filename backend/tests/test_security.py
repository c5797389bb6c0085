from datetime import timedelta

import pytest

from leave_management.core.enums import Role
from leave_management.core.exceptions import UnauthorizedError
from leave_management.core.security import (
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    user_id_from_token,
    verify_password,
)
from leave_management.models import User


def test_password_hash_round_trip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


@pytest.mark.parametrize("stored", ["", None, "plaintext-not-a-hash"])
def test_unusable_stored_hash_never_matches(stored):
    assert not verify_password("plaintext-not-a-hash", stored)


def test_user_token_carries_identity_claims():
    user = User(id=7, name="Mia", email="mia@acme.com", role=Role.MANAGER)

    token = create_user_token(user)

    claims = decode_access_token(token)
    assert claims["sub"] == "7"
    assert claims["email"] == "mia@acme.com"
    assert claims["name"] == "Mia"
    assert claims["role"] == "MANAGER"
    assert user_id_from_token(token) == 7


def test_garbage_token_is_unauthorized():
    with pytest.raises(UnauthorizedError, match="Invalid authentication credentials"):
        decode_access_token("not-a-jwt")


def test_expired_token_is_unauthorized():
    token = create_access_token({"sub": "7"}, expires_delta=timedelta(minutes=-1))

    with pytest.raises(UnauthorizedError):
        user_id_from_token(token)


@pytest.mark.parametrize("claims", [{}, {"sub": "abc"}])
def test_token_without_numeric_subject_is_unauthorized(claims):
    token = create_access_token(claims)

    with pytest.raises(UnauthorizedError, match="Invalid token payload"):
        user_id_from_token(token)
