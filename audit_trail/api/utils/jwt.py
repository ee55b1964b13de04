from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

REQUIRED_CLAIMS = ("user_id", "role")


def create_access_token(
    user_id: str, role: str, expires_delta: timedelta = timedelta(minutes=15)
) -> str:
    """
    Create a caller access token

    Tokens are normally issued by the identity service; this mirrors its
    claim layout for local tooling and tests.

    Args:
        user_id: Caller identity (e.g. FIN-001, jane.smith@company.com)
        role: SuperAdmin, "<Department> Admin" or any user role
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode a caller access token.

    Returns:
        Payload with non-empty user_id and role claims, or None when the
        signature, expiry or claims do not check out
    """
    try:
        payload = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])
    except JWTError:
        return None

    if not all(payload.get(claim) for claim in REQUIRED_CLAIMS):
        return None
    return payload
