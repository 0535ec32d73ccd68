"""Authentication: JWT bearer tokens issued by the identity provider.

The user id carried in the token is treated as an opaque string; this
service never creates or authenticates users itself.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from ..config import settings

# Bearer token scheme; tokens come from the identity provider
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


class CurrentUser(BaseModel):
    """Identity of the authenticated caller."""

    id: str
    email: Optional[str] = None


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.

    Used by development tooling and tests; production tokens are issued by
    the identity provider with the same secret and algorithm.

    Args:
        data: Dictionary of claims to encode in the token ("sub" is the user id)
        expires_delta: Optional custom expiration time delta

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.jwt_expiration_minutes
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[CurrentUser]:
    """
    Decode and validate a JWT access token.

    Args:
        token: The JWT token string to decode

    Returns:
        CurrentUser, or None if the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return CurrentUser(id=str(user_id), email=payload.get("email"))


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
) -> CurrentUser:
    """
    Get the current authenticated user from the JWT token.

    This is a FastAPI dependency that extracts and validates
    the JWT token from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    current_user = decode_access_token(token)
    if current_user is None:
        raise credentials_exception

    return current_user
