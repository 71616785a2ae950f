"""Security data models"""

from dataclasses import dataclass
from typing import Optional

from ..models.user import UserRole


@dataclass
class Identity:
    """Authenticated caller as established by the token verifier"""
    user_id: str
    role: UserRole = UserRole.USER
    expires: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_access(self, owner_id: str) -> bool:
        """Owners and administrators may access a user-owned resource"""
        return self.is_admin or self.user_id == owner_id
