"""
User role value object with the authorization hierarchy.
"""

from enum import Enum


class UserRole(str, Enum):
    """Marketplace roles. Staff can do anything a developer or player can."""

    PLAYER = "player"
    DEVELOPER = "developer"
    STAFF = "staff"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def includes(self, other: "UserRole") -> bool:
        """Business rule: a role grants every permission of the roles below it."""
        return self.rank >= other.rank


_ROLE_RANK = {
    UserRole.PLAYER: 0,
    UserRole.DEVELOPER: 1,
    UserRole.STAFF: 2,
}
