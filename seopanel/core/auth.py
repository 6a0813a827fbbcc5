"""Authentication utilities"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from seopanel.core.config import settings
from seopanel.core.security.rbac import Actor, Role
from seopanel.exceptions import AccessDenied


# Security scheme; missing credentials are reported as AccessDenied rather than 403 from FastAPI
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict:
    """Decode and verify JWT token"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload
    except JWTError:
        raise AccessDenied("Access denied: invalid authentication credentials")


def actor_from_token(token: str) -> Actor:
    """Build an Actor from the `sub` and `role` claims of a token"""
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise AccessDenied("Access denied: token has no subject")
    try:
        role = Role(payload.get("role", Role.VIEWER.value))
    except ValueError:
        raise AccessDenied(f"Access denied: unknown role '{payload.get('role')}'")
    return Actor(id=str(user_id), role=role)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Actor:
    """
    Get the current actor from the bearer token.

    Raises:
        AccessDenied: If the token is missing or invalid
    """
    if credentials is None:
        raise AccessDenied("Access denied: authentication required")
    return actor_from_token(credentials.credentials)
