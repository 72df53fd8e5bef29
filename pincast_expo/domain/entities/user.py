"""
User domain entity - an identity resolved from a verified token subject.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from pincast_expo.domain.value_objects.user_role import UserRole


@dataclass
class User:
    id: UUID
    identity_subject: str
    role: UserRole
    email: Optional[str] = None
    display_name: Optional[str] = None

    def has_role(self, required: UserRole) -> bool:
        """Business rule: roles are hierarchical (staff > developer > player)."""
        return self.role.includes(required)

    @property
    def audit_label(self) -> str:
        """How the user is named in default audit reasons: email, else id."""
        return self.email or str(self.id)
