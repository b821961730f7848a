# backend/vx_core/parents/tokens.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings

ALGORITHM = "HS256"
USER_TYPE_PARENT = "parent"


def _secret() -> str:
    return settings.PARENT_JWT_SECRET


def issue_parent_token(parent) -> str:
    now = datetime.now(timezone.utc)
    lifetime = getattr(settings, "PARENT_TOKEN_LIFETIME", timedelta(days=7))
    payload = {
        "userId": str(parent.id),
        "email": parent.user.email,
        "userType": USER_TYPE_PARENT,
        "role": USER_TYPE_PARENT,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, _secret(), algorithm=ALGORITHM)


def decode_parent_token(token: str) -> dict[str, Any]:
    """Raises jwt.InvalidTokenError (incl. ExpiredSignatureError) on a bad token."""
    return jwt.decode(token, _secret(), algorithms=[ALGORITHM], options={"require": ["exp", "userId"]})
