"""Principal extraction from ``Authorization: Bearer <jwt>`` headers.

Login and token issuance live outside this service; ``issue_token`` is for
scripts and tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import jwt

from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: Role


def extract_bearer(auth_header: Optional[str]) -> Optional[str]:
    """Return the token part of a Bearer header, or None if missing/malformed."""
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0] != "Bearer":
        return None
    return parts[1]


def decode_principal(token: str, *, secret: str, algorithms: Sequence[str] = ("HS256",)) -> Principal:
    try:
        payload = jwt.decode(token, secret, algorithms=list(algorithms))
    except jwt.PyJWTError as exc:
        logger.info("Token verification failed: %s", exc)
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("id") or payload.get("user_id") or payload.get("sub")
    try:
        uid = int(user_id)
        role = Role(str(payload.get("role", "")).lower())
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")
    return Principal(user_id=uid, role=role)


def issue_token(
    user_id: int,
    role: Role | str,
    *,
    secret: str,
    algorithm: str = "HS256",
    expires_in: Optional[timedelta] = None,
) -> str:
    """Mint a token for a principal (used by tooling and tests)."""
    claims = {"id": int(user_id), "role": Role(role).value}
    if expires_in is not None:
        claims["exp"] = datetime.now(timezone.utc) + expires_in
    return jwt.encode(claims, secret, algorithm=algorithm)
