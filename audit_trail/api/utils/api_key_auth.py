"""
Static API Key Authentication

Service-to-service credentials for the write and maintenance endpoints.
Key issuance and rotation belong to the platform, not to this service.
"""

import secrets

from fastapi import Header, status
from libs.result import Error
from audit_trail.api.error import ClientError
from config import ApplicationConfig


def _check_key(provided: str, expected: str, missing_message: str) -> bool:
    if not provided:
        raise ClientError(
            Error("UNAUTHORIZED", missing_message),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(provided, expected):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True


async def verify_service_api_key(x_api_key: str = Header(None)):
    """
    Verify the X-API-Key header sent by services that record audit events.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    return _check_key(x_api_key, ApplicationConfig.SERVICE_API_KEY, "Service API key required")


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify the X-Admin-API-Key header for administrative endpoints.

    Raises:
        ClientError: 401 if key is missing or invalid
    """
    return _check_key(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY, "Admin API key required")
