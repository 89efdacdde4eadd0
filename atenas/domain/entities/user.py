"""User entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, List
import re

from ..value_objects.entity_ids import UserId, HeadquartersId
from ..enums import RoleName, ROLE_PRIORITY, DASHBOARD_PATHS


USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


def validate_username(username: str) -> str:
    username = (username or "").strip()
    if not 3 <= len(username) <= 20:
        raise ValueError("Username must be between 3 and 20 characters")
    if not USERNAME_PATTERN.match(username):
        raise ValueError("Username can only contain letters, numbers and underscores")
    return username


def validate_password(password: str) -> str:
    if len(password or "") < 8:
        raise ValueError("Password must be at least 8 characters")
    if not any(c.isupper() for c in password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one number")
    return password


@dataclass
class User:
    id: UserId
    email: str
    hashed_password: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[date] = None
    headquarter_id: Optional[HeadquartersId] = None
    profile_image_url: Optional[str] = None
    roles: List[RoleName] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        email: str,
        hashed_password: str,
        username: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        roles: Optional[List[RoleName]] = None,
    ) -> 'User':
        """Factory method to create a new user with proper defaults"""
        return cls(
            id=UserId.generate(),
            email=email.lower(),
            hashed_password=hashed_password,
            username=validate_username(username),
            first_name=first_name,
            last_name=last_name,
            roles=list(roles) if roles else [RoleName.DONATOR],
        )

    def update_profile(self, **fields) -> None:
        """Apply the non-None profile fields"""
        for name in ("first_name", "last_name", "phone", "birthdate", "headquarter_id"):
            if name in fields and fields[name] is not None:
                setattr(self, name, fields[name])
        if fields.get("username") is not None:
            self.username = validate_username(fields["username"])

    def replace_roles(self, roles: List[RoleName]) -> None:
        if not roles:
            raise ValueError("At least one role is required")
        self.roles = list(dict.fromkeys(roles))

    @property
    def effective_roles(self) -> List[RoleName]:
        # A user without role rows is a donor
        return self.roles or [RoleName.DONATOR]

    @property
    def primary_role(self) -> RoleName:
        roles = set(self.effective_roles)
        for role in ROLE_PRIORITY:
            if role in roles:
                return role
        return RoleName.DONATOR

    @property
    def dashboard_path(self) -> str:
        return DASHBOARD_PATHS[self.primary_role]

    @property
    def has_completed_profile(self) -> bool:
        return bool(self.username and self.first_name and self.last_name)

    def has_role(self, *roles: RoleName) -> bool:
        return any(role in self.effective_roles for role in roles)

    @property
    def is_admin(self) -> bool:
        return RoleName.ADMIN in self.effective_roles

    @property
    def full_name(self) -> str:
        """Get full name"""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.username or self.email
