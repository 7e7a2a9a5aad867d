# app/services/parsers/schedule_parser.py

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from .common_structs import Activity, ParsedSchedule, ScheduleDay
from .header_parser import tokenize, parse_header
from .calendar_grid import find_calendar_start, reconstruct_grid, days_in_month

from app.services.utils.data_validator import is_no_shift_activity, is_appointment_code, compare_time_strings


log = logging.getLogger(__name__)

DEFAULT_APPOINTMENT_TIME = '9:00'


def select_appointment(activities: List[Activity],
                       appointment_codes: Optional[Iterable[str]] = None) -> Optional[Tuple[str, str]]:
    """
    Выбирает приём дня: самый ранний по времени среди типов приёма.
    Код без времени берётся, только пока ничего не выбрано, и уступает любому приёму со временем.
    Возвращает (код, время) или None, если типов приёма в дне нет.
    """
    appointment_type = ''
    earliest_time = ''

    for activity in activities:
        if not is_appointment_code(activity.code, appointment_codes):
            continue
        if activity.time:
            if not earliest_time or compare_time_strings(activity.time, earliest_time) < 0:
                earliest_time = activity.time
                appointment_type = activity.code
        elif not appointment_type:
            appointment_type = activity.code

    if not appointment_type:
        return None
    return appointment_type, earliest_time or DEFAULT_APPOINTMENT_TIME


def build_schedule_days(day_activities: Dict[int, List[Activity]], year: int, month: int,
                        appointment_codes: Optional[Iterable[str]] = None) -> List[ScheduleDay]:
    """Превращает разложенные по дням активности в список дней со сменами (по возрастанию даты)."""
    days = []
    for day in range(1, days_in_month(year, month) + 1):
        activities = day_activities.get(day)
        if not activities:
            continue

        # CLOSED/ADMIN в любой позиции отменяет смену на весь день
        if any(is_no_shift_activity(a.code) for a in activities):
            log.info(f"  [✗] {day:>2}: день без смены ({', '.join(a.code for a in activities)})")
            continue

        selected = select_appointment(activities, appointment_codes)
        if not selected:
            log.info(f"  [✗] {day:>2}: нет типов приёма среди активностей")
            continue

        appointment_type, appointment_time = selected
        days.append(ScheduleDay(
            date=date(year, month + 1, day),
            appointment_type=appointment_type,
            appointment_time=appointment_time,
        ))
        log.info(f"  [✓] {day:>2}: {appointment_type} в {appointment_time}")

    return days


# --- Главная функция парсера ---

def parse_schedule_text(text: str, appointment_codes: Optional[Iterable[str]] = None) -> ParsedSchedule:
    """
    Главная функция парсера. Принимает сырой текст, извлечённый из документа
    с месячным календарём клиники, и возвращает ParsedSchedule.
    Не выбрасывает исключений из-за содержимого: все проблемы попадают в errors.
    """
    log.info("Запуск парсера расписания клиники...")

    tokens = tokenize(text)
    if not tokens:
        log.warning("Документ пуст.")
        return ParsedSchedule(errors=['Empty document'])

    header = parse_header(tokens)
    schedule = ParsedSchedule(
        month=header.month,
        year=header.year,
        location_code=header.location_code,
        errors=list(header.errors),
    )
    if not header.ok:
        return schedule

    calendar_start = find_calendar_start(tokens)
    if calendar_start is None:
        log.warning("Не найдена строка с днями недели (Sunday Monday ...).")
        schedule.errors.append('Could not find calendar header')
        return schedule

    day_activities = reconstruct_grid(tokens[calendar_start:], header.year, header.month, appointment_codes)
    schedule.days = build_schedule_days(day_activities, header.year, header.month, appointment_codes)

    log.info(f"Парсер расписания завершил работу: {len(schedule.days)} дн. со сменами.")
    return schedule
