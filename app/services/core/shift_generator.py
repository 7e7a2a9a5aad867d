# app/services/core/shift_generator.py

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from app.services.parsers.common_structs import ParsedSchedule, ScheduleDay
from app.services.utils.data_validator import time_to_minutes


log = logging.getLogger(__name__)


MONTHS_SHORT_EN = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass(frozen=True)
class ShiftDraft:
    """Черновик смены для импорта. В базу его записывает внешний импорт, не этот модуль."""
    title: str
    date: date
    start_time: datetime
    end_time: datetime
    zone_name: str
    shift_type: str


def default_title(location_code: str, day: date) -> str:
    """'RAL - Jan 2'"""
    return f"{location_code} - {MONTHS_SHORT_EN[day.month - 1]} {day.day}"


def day_to_shift(day: ScheduleDay, location_code: str, zone_name: str, shift_type: str,
                 shift_duration_minutes: int = 120, offset_before_minutes: int = 30,
                 title: Optional[str] = None) -> ShiftDraft:
    """
    Строит окно смены вокруг приёма: начало за offset_before_minutes до приёма,
    длительность shift_duration_minutes. Переход через полночь не обрезается.
    """
    start_minutes = time_to_minutes(day.appointment_time) - offset_before_minutes
    midnight = datetime.combine(day.date, time.min)
    start_time = midnight + timedelta(minutes=start_minutes)
    end_time = start_time + timedelta(minutes=shift_duration_minutes)

    return ShiftDraft(
        title=title or default_title(location_code, day.date),
        date=day.date,
        start_time=start_time,
        end_time=end_time,
        zone_name=zone_name,
        shift_type=shift_type,
    )


def schedule_to_shifts(schedule: ParsedSchedule, zone_name: str, shift_type: str,
                       shift_duration_minutes: int = 120, offset_before_minutes: int = 30,
                       title: Optional[str] = None) -> List[ShiftDraft]:
    """
    Превращает разобранное расписание в черновики смен (порядок - как у schedule.days).
    По умолчанию смена двухчасовая и начинается за 30 минут до приёма.
    """
    shifts = [
        day_to_shift(day, schedule.location_code, zone_name, shift_type,
                     shift_duration_minutes=shift_duration_minutes,
                     offset_before_minutes=offset_before_minutes,
                     title=title)
        for day in schedule.days
    ]
    log.info(f"Сгенерировано черновиков смен: {len(shifts)} (зона '{zone_name}', тип '{shift_type}')")
    return shifts
