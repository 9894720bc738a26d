"""
User related data models
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


class Role(Enum):
    ADMIN = "admin"
    BAKER = "baker"
    BARISTA = "barista"


@dataclass
class User:
    """User data model"""
    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: Role
    locked: bool = False
    user_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (password hash is never exported)"""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "locked": self.locked
        }
