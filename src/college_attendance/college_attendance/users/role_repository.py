from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import Role


class RoleRepository(Protocol):
    def has_role(self, user_id: int, role: Role) -> bool:
        raise NotImplementedError

    def add_role(self, user_id: int, role: Role) -> None:
        """Grant a role. Raises ConflictError if the user already holds it."""

        raise NotImplementedError

    def remove_role(self, user_id: int, role: Role) -> None:
        raise NotImplementedError

    def list_grants(self, role: Role) -> Sequence[tuple[int, datetime | None]]:
        """(user_id, granted_at) pairs for every holder of ``role``."""

        raise NotImplementedError
