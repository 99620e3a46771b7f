from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import AdminProfile
from .repository import UserRepository
from .role_repository import RoleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: Optional[str]
    is_admin: bool


def _normalize_email(email: Optional[str]) -> str:
    email = require_non_empty(email, "Email").lower()
    if "@" not in email:
        raise ValidationError("Email is not valid")
    return email


class AuthService:
    """Use case: sign up and sign in."""

    def __init__(self, users: UserRepository, roles: RoleRepository):
        self._users = users
        self._roles = roles

    def sign_up(self, *, email: str, password: str, full_name: Optional[str] = None) -> int:
        email = _normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        user_id = self._users.create_user(
            email=email,
            full_name=optional_text(full_name),
            password_hash=generate_password_hash(password),
        )
        logger.info("Account created for %s (user_id=%s)", email, user_id)
        return user_id

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            is_admin=self._roles.has_role(user.user_id, Role.ADMIN),
        )


class AdminService:
    """Use case: manage who holds the admin grant."""

    def __init__(self, users: UserRepository, roles: RoleRepository):
        self._users = users
        self._roles = roles

    def is_admin(self, user_id: int) -> bool:
        return self._roles.has_role(int(user_id), Role.ADMIN)

    def grant_admin(self, email: str) -> int:
        """Grant admin to an already signed-up account.

        Raises NotFoundError when no account has ``email`` (nothing is created)
        and ConflictError when the account is already an admin.
        """

        email = _normalize_email(email)
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User with this email not found. They must sign up first.")

        self._roles.add_role(user.user_id, Role.ADMIN)
        logger.info("Admin role granted to %s (user_id=%s)", email, user.user_id)
        return user.user_id

    def revoke_admin(self, user_id: int) -> None:
        self._roles.remove_role(int(user_id), Role.ADMIN)
        logger.info("Admin role removed from user_id=%s", user_id)

    def list_admins(self) -> list[AdminProfile]:
        grants = self._roles.list_grants(Role.ADMIN)
        if not grants:
            return []

        granted_at = dict(grants)
        users = self._users.list_by_ids(list(granted_at))
        return [
            AdminProfile(
                user_id=u.user_id,
                email=u.email,
                full_name=u.full_name,
                granted_at=granted_at.get(u.user_id),
            )
            for u in users
        ]
