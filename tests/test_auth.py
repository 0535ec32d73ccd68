"""Unit tests for JWT token handling."""

from datetime import timedelta

import pytest
from fastapi import HTTPException

from issue_tracker.services.auth_service import (
    create_access_token,
    decode_access_token,
    get_current_user,
)


class TestTokens:
    """Tests for creating and decoding access tokens."""

    def test_decode_valid_token(self):
        token = create_access_token({"sub": "user-1", "email": "test@example.com"})

        current_user = decode_access_token(token)

        assert current_user.id == "user-1"
        assert current_user.email == "test@example.com"

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(minutes=-5))

        assert decode_access_token(token) is None

    def test_token_without_subject(self):
        token = create_access_token({"email": "test@example.com"})

        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not.a.token") is None


@pytest.mark.asyncio
class TestGetCurrentUser:
    """Tests for the get_current_user dependency."""

    async def test_missing_token(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None)

        assert exc_info.value.status_code == 401

    async def test_valid_token(self):
        token = create_access_token({"sub": "user-3"})

        current_user = await get_current_user(token)

        assert current_user.id == "user-3"
