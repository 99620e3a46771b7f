from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list_holidays(self) -> list[Holiday]:
        return list(self._holidays.list_all())

    def add_holiday(self, *, day: date, reason: Optional[str]) -> int:
        reason = require_non_empty(reason, "Reason")
        holiday_id = self._holidays.create(day=day, reason=reason)
        logger.info("Holiday added: %s (%s)", day.isoformat(), reason)
        return holiday_id

    def delete_holiday(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday deleted (holiday_id=%s)", holiday_id)
