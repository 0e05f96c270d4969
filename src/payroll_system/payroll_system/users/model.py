from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object (no DB access code). Email is stored lower-cased.
    """

    user_id: int
    email: str
    password_hash: str
    name: str
    role: Role
    department: Optional[str]
    created_at: datetime

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "department": self.department,
            "createdAt": self.created_at.isoformat(),
        }
