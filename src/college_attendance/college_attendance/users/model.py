from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a signed-up account (profile).

    Note: Plain data object, no DB access code here.
    """

    user_id: int
    email: str
    full_name: Optional[str]
    password_hash: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AdminProfile:
    """Read-model for the admin management table."""

    user_id: int
    email: str
    full_name: Optional[str]
    granted_at: Optional[datetime] = None
