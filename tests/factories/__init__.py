"""Builders for hosted backend rows and viewer session tokens.

Rows mirror what the backend's REST API returns for the selects issued by
BackendClient, with embedded profiles under ``sender`` / ``requester``.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from django.conf import settings

import jwt
from faker import Faker

fake = Faker()

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def profile_row(**overrides: Any) -> dict[str, Any]:
    """Build an embedded profile."""
    row = {
        "id": str(uuid4()),
        "full_name": fake.name(),
        "avatar_url": fake.image_url(),
    }
    row.update(overrides)
    return row


def notification_row(
    category: str = "sports", minutes: int = 0, **overrides: Any
) -> dict[str, Any]:
    """Build a notifications row created ``minutes`` after BASE_TIME."""
    sender = profile_row()
    row = {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "title": fake.sentence(nb_words=4),
        "content": fake.sentence(),
        "category": category,
        "created_at": (BASE_TIME + timedelta(minutes=minutes)).isoformat(),
        "sender_id": sender["id"],
        "sender": sender,
    }
    row.update(overrides)
    return row


def connection_request_row(
    recipient_id: str | None = None,
    status: str = "pending",
    minutes: int = 0,
    **overrides: Any,
) -> dict[str, Any]:
    """Build a connection_requests row created ``minutes`` after BASE_TIME."""
    requester = profile_row()
    row = {
        "id": str(uuid4()),
        "requester_id": requester["id"],
        "recipient_id": recipient_id or str(uuid4()),
        "status": status,
        "created_at": (BASE_TIME + timedelta(minutes=minutes)).isoformat(),
        "requester": requester,
    }
    row.update(overrides)
    return row


def session_token(
    user_id: str,
    role: str = "authenticated",
    expires_in: timedelta = timedelta(hours=1),
    audience: str = "authenticated",
    secret: str | None = None,
) -> str:
    """Sign a viewer session JWT the way the backend's auth API does."""
    now = datetime.now(UTC)
    claims = {
        "sub": user_id,
        "role": role,
        "aud": audience,
        "email": fake.email(),
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret or settings.BACKEND_JWT_SECRET, algorithm="HS256")
