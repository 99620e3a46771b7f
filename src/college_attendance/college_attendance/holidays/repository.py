from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_all(self) -> Sequence[Holiday]:
        """Holidays ordered by date, newest first."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, *, day: date, reason: str) -> int:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
