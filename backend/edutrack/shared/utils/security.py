"""
Security Utilities

JWT handling for the bearer tokens this service accepts.

Tokens are issued by the staff login service; this service only verifies
them. Required claims:

    user_id   UUID of the staff account
    role      "admin" | "manager"
    exp       expiry (checked by PyJWT)

Usage:
======
    from edutrack.shared.utils.security import SecurityUtils

    claims = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
    claims.user_id, claims.role
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt

from edutrack.shared.models.enums import UserRole


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: UUID
    role: UserRole


class SecurityUtils:
    """JWT token creation and validation."""

    @staticmethod
    def create_access_token(
        user_id: UUID,
        role: UserRole,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed access token.

        Used by tooling and tests; production tokens come from the login
        service with the same claim layout.

        Args:
            user_id: Staff account id
            role: Staff role
            secret_key: Signing key
            expires_delta: Lifetime (default: 1 day)
            algorithm: JWT algorithm (default: HS256)
        """
        now = datetime.now(timezone.utc)
        payload = {
            "user_id": str(user_id),
            "role": role.value,
            "iat": now,
            "exp": now + (expires_delta or timedelta(days=1)),
        }
        return jwt.encode(payload, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> TokenClaims:
        """
        Verify a token and extract its claims.

        Raises:
            ValueError: If the token is expired, invalid, or lacks a valid
                user_id / role claim
        """
        try:
            payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

        try:
            return TokenClaims(
                user_id=UUID(str(payload["user_id"])),
                role=UserRole(payload["role"]),
            )
        except (KeyError, ValueError):
            raise ValueError("Invalid token: missing or malformed identity claims")
