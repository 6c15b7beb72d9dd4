"""Caller identity as asserted by the upstream gateway.

Authentication happens before requests reach this service; the gateway
forwards the authenticated user's id in ``X-User-Id``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request, HTTPException

USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"


@dataclass
class AuthContext:
    user_id: int
    role: str = ""  # informational; lifecycle checks compare ids, not roles


def get_current_user(request: Request) -> AuthContext:
    """Read the identity headers or raise 401."""
    raw = request.headers.get(USER_ID_HEADER)
    if not raw:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        user_id = int(raw)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user identity")
    return AuthContext(user_id=user_id, role=request.headers.get(USER_ROLE_HEADER, ""))
