"""
Caller roles.
Roles arrive as free-form strings in the token scope claim and are narrowed
to this closed set at the boundary.
"""

from enum import Enum
from typing import Iterable, List, Optional, Union


class Role(str, Enum):
    """Roles recognised by the task service."""
    ADMIN = "ROLE_ADMIN"
    USER = "ROLE_USER"

    @classmethod
    def parse(cls, value: str) -> Optional["Role"]:
        """
        Parse a single claim value, case-insensitively.
        Only the prefixed spelling is recognised; a bare "admin" is unknown.
        Returns None for roles this service does not know about.
        """
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None

    @classmethod
    def parse_all(cls, values: Optional[Iterable[str]]) -> List["Role"]:
        """Parse a claim list, dropping unknown entries and duplicates."""
        roles: List[Role] = []
        for value in values or []:
            role = cls.parse(value)
            if role is not None and role not in roles:
                roles.append(role)
        return roles


def is_admin(roles: Optional[Iterable[Union[Role, str]]]) -> bool:
    """Single admin predicate used by every authorization check."""
    if not roles:
        return False
    return any(
        role is Role.ADMIN or (isinstance(role, str) and Role.parse(role) is Role.ADMIN)
        for role in roles
    )
