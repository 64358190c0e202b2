"""Backend session authentication for Django REST Framework.

Viewers authenticate with the session token issued by the hosted backend's
auth API. The token is validated here and then forwarded unchanged on every
backend call, so the backend's row-level policy applies to the viewer.

Supports two validation modes:
1. Introspection: asks the backend's auth API who the token belongs to
2. Local JWT validation: verifies the token signature with the shared secret
"""

from typing import Any, cast

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from core.config.backend import get_anon_key, get_auth_url

logger = structlog.get_logger(__name__)


class SessionUser:
    """Authenticated viewer of a request.

    This is not a Django User model, just a container for token claims
    plus the raw token to forward to the backend.
    """

    def __init__(
        self,
        user_id: str,
        access_token: str,
        role: str = "authenticated",
        email: str | None = None,
    ):
        """Initialize session user.

        Args:
            user_id: Backend user ID (the token subject)
            access_token: Raw session token
            role: Backend role claim
            email: Email claim, if present
        """
        self.id = user_id
        self.user_id = user_id
        self.access_token = access_token
        self.role = role
        self.email = email
        self.is_authenticated = True

    def __str__(self):
        """String representation."""
        return f"SessionUser(user_id={self.user_id}, role={self.role})"


class BackendSessionAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication against the hosted backend's sessions."""

    def authenticate(self, request):
        """Authenticate the request using the Bearer session token.

        Args:
            request: Django request object

        Returns:
            Tuple of (user, token) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]

        if settings.AUTH_INTROSPECTION_ENABLED:
            claims = self._validate_via_introspection(token)
        else:
            claims = self._validate_via_jwt(token)

        user_id = claims.get("sub")
        if not user_id:
            raise exceptions.AuthenticationFailed("Token without subject")

        user = SessionUser(
            user_id=str(user_id),
            access_token=token,
            role=claims.get("role", "authenticated"),
            email=claims.get("email"),
        )
        return (user, token)

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Resolve the token to its user through the backend's auth API.

        Args:
            token: Session token to validate

        Returns:
            Claims with ``sub``, ``role`` and ``email``

        Raises:
            AuthenticationFailed: If token is invalid
        """
        cache_key = f"{settings.AUTH_TOKEN_CACHE_PREFIX}{token[-32:]}"
        cached_claims = cache.get(cache_key)
        if cached_claims:
            logger.debug("Using cached session introspection result")
            return cast("dict[str, Any]", cached_claims)

        try:
            logger.debug("Calling session introspection endpoint")
            response = requests.get(
                f"{get_auth_url()}/user",
                headers={
                    "apikey": get_anon_key(),
                    "Authorization": f"Bearer {token}",
                },
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("Session introspection request failed", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Session validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "Session introspection rejected token",
                status_code=response.status_code,
            )
            raise exceptions.AuthenticationFailed("Session is not active")

        data = response.json()
        claims = {
            "sub": data.get("id"),
            "role": data.get("role", "authenticated"),
            "email": data.get("email"),
        }
        cache.set(cache_key, claims, timeout=settings.AUTH_TOKEN_CACHE_TTL)
        return claims

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate the session token locally by verifying its signature.

        Args:
            token: Session JWT to validate

        Returns:
            Token claims

        Raises:
            AuthenticationFailed: If token is invalid
        """
        if not settings.BACKEND_JWT_SECRET:
            logger.error("BACKEND_JWT_SECRET not configured but local validation is on")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            return jwt.decode(
                token,
                settings.BACKEND_JWT_SECRET,
                algorithms=["HS256"],
                audience=settings.BACKEND_JWT_AUDIENCE,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Session token has expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid session token", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
