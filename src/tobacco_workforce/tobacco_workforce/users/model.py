from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Login account. The role is stored on the record, never inferred."""

    email: str
    full_name: str
    password_hash: str
    role: Role
    is_active: bool = True

    @classmethod
    def from_settings(cls, data: Optional[Mapping]) -> Optional["Account"]:
        """Build the configured fallback account, if any."""
        if not data or not data.get("email") or not data.get("password_hash"):
            return None
        return cls(
            email=str(data["email"]).strip().lower(),
            full_name=str(data.get("full_name") or data["email"]),
            password_hash=str(data["password_hash"]),
            role=Role(data.get("role") or Role.USER.value),
        )
