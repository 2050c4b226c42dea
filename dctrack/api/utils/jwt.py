from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

SHARE_TOKEN_PURPOSE = "installation_share"


def generate_jwt(user_id: int, name: str, email: str, role: str) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User ID
        name: Display name, copied onto audit entries
        email: User email
        role: User role (Admin, Client, User)

    Returns:
        JWT token string (HS256, JWT_EXPIRE_MINUTES expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "name": name,
        "email": email,
        "role": role,
        "exp": now + timedelta(minutes=ApplicationConfig.JWT_EXPIRE_MINUTES),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
    except JWTError:
        return None

    # Share tokens are not access tokens
    if payload.get("purpose") == SHARE_TOKEN_PURPOSE:
        return None
    return payload


def generate_share_token(installation_id: int, expires_delta: timedelta) -> str:
    """
    Create a signed, expiring token granting read access to one installation

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "purpose": SHARE_TOKEN_PURPOSE,
        "installation_id": installation_id,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_share_token(token: str) -> Optional[int]:
    """
    Returns:
        The shared installation ID, or None if the token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
    except JWTError:
        return None

    if payload.get("purpose") != SHARE_TOKEN_PURPOSE:
        return None
    return payload.get("installation_id")
