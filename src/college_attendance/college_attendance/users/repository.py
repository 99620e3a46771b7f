from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for accounts.

    Note: the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, full_name: Optional[str], password_hash: str) -> int:
        """Insert an account. Raises ConflictError on a duplicate email."""

        raise NotImplementedError
