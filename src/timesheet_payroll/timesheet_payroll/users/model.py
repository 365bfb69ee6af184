from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Employee profile.

    Note: plain data object, no DB access code here.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    department: str
    staff_house: bool = False
    is_active: bool = True

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "department": self.department,
            "staff_house": self.staff_house,
            "active": self.is_active,
        }
