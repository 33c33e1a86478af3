from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no DB access code).
    """

    user_id: int
    name: str
    email: str
    role: Role
    employee_id: Optional[str] = None
