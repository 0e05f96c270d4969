from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: who (user_id) and as what (role)."""

    user_id: int
    role: Role

    @classmethod
    def admin(cls, user_id: int) -> "Principal":
        return cls(user_id=int(user_id), role=Role.ADMIN)

    @classmethod
    def employee(cls, user_id: int) -> "Principal":
        return cls(user_id=int(user_id), role=Role.EMPLOYEE)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_employee(self) -> bool:
        return self.role == Role.EMPLOYEE
