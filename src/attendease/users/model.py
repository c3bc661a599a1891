from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object. ``credits`` is only meaningful for trainees and is
    changed exclusively by the ledger engine.
    """

    id: str
    email: str
    name: str
    phone_number: str
    password: str
    role: Role
    credits: int = 0
    profile_image: Optional[str] = None

    @property
    def is_trainee(self) -> bool:
        return self.role == Role.TRAINEE
