# app/services/parsers/calendar_grid.py

"""
Восстановление сетки календаря из плоского потока токенов.

После извлечения текста из .docx от таблицы не остаётся ни строк, ни колонок:
каждая неделя выглядит как номера дней подряд, за которыми идут все активности
этой недели без разделителей между ячейками. Например:

    1 2 3 CLOSED DE-8:30 MM-9:30 CONSULTS

Колонку (день недели) каждого номера вычисляем по календарю, а активности
раскладываем по дням жадно слева направо: в ячейке либо один код
без смены (CLOSED/ADMIN), либо одна-две активности со временем, либо один
код без времени.
"""

import calendar
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .common_structs import Activity

from app.services.utils.data_validator import (
    APPOINTMENT_CODE_PATTERN,
    TIMED_ACTIVITY_PATTERN,
    is_no_shift_activity,
    normalize_activity,
    parse_day_number,
)


log = logging.getLogger(__name__)

DAYS_IN_WEEK = 7


def find_calendar_start(tokens: List[str]) -> Optional[int]:
    """
    Ищет строку заголовка с днями недели ("Sunday Monday ...")
    и возвращает индекс первого токена тела календаря.
    """
    for i in range(len(tokens) - 6):
        if tokens[i].lower() == 'sunday' and tokens[i + 1].lower() == 'monday':
            return i + DAYS_IN_WEEK  # Пропускаем семь названий дней
    return None


def first_weekday_column(year: int, month: int) -> int:
    """Колонка первого числа месяца при неделе, начинающейся с воскресенья (0 = Sunday)."""
    return (calendar.weekday(year, month + 1, 1) + 1) % DAYS_IN_WEEK


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def parse_activity_token(token: str, appointment_codes: Optional[Iterable[str]] = None) -> Optional[Activity]:
    """Возвращает Activity, если токен - активность ('DE-8:30', 'CLOSED', 'CONSULTS')."""
    timed_match = TIMED_ACTIVITY_PATTERN.match(token)
    if timed_match:
        code, time_str = timed_match.groups()
        return Activity(code=code, time=time_str)

    if is_no_shift_activity(token):
        return Activity(code=normalize_activity(token))

    if appointment_codes:
        if normalize_activity(token) in {normalize_activity(c) for c in appointment_codes}:
            return Activity(code=normalize_activity(token))
        return None

    if APPOINTMENT_CODE_PATTERN.match(token):
        return Activity(code=token)
    return None


def map_week_columns(week_days: List[int], first_day_column: int) -> List[Optional[int]]:
    """
    Раскладывает номера дней недели по колонкам Sun..Sat.
    Первая неделя начинается с колонки первого числа, все остальные - с воскресенья.
    """
    start_column = first_day_column if week_days[0] == 1 else 0

    column_to_day: List[Optional[int]] = [None] * DAYS_IN_WEEK
    for offset, day in enumerate(week_days):
        column = start_column + offset
        if column < DAYS_IN_WEEK:
            column_to_day[column] = day
        else:
            log.warning(f"День {day} выходит за пределы недели (колонка {column}). Пропускаем.")
    return column_to_day


def assign_week_activities(column_to_day: List[Optional[int]],
                           week_activities: List[Activity],
                           day_activities: Dict[int, List[Activity]]) -> None:
    """
    Жадно раскладывает активности недели по ячейкам слева направо.
    Одна ячейка забирает:
      - CLOSED/ADMIN - одну активность;
      - активность со временем - её и следующую, если у следующей тоже есть время;
      - активность без времени - одну.
    """
    activity_index = 0
    for day in column_to_day:
        if activity_index >= len(week_activities):
            break
        if day is None:
            continue

        activity = week_activities[activity_index]
        day_activities[day].append(activity)
        activity_index += 1

        if is_no_shift_activity(activity.code) or not activity.time:
            continue

        # Два приёма в одной ячейке: "DE-8:30 MM-9:30"
        if activity_index < len(week_activities) and week_activities[activity_index].time:
            day_activities[day].append(week_activities[activity_index])
            activity_index += 1

    if activity_index < len(week_activities):
        skipped = len(week_activities) - activity_index
        log.warning(f"Не удалось разложить {skipped} активн. по дням недели {[d for d in column_to_day if d]}")


def _read_week(tokens: List[str], i: int,
               appointment_codes: Optional[Iterable[str]]) -> Tuple[List[int], List[Activity], int]:
    """Читает одну неделю: номера дней и следующие за ними активности."""
    week_days = []
    while i < len(tokens):
        day = parse_day_number(tokens[i])
        if day is None:
            break
        week_days.append(day)
        i += 1

    week_activities = []
    if week_days:
        while i < len(tokens):
            activity = parse_activity_token(tokens[i], appointment_codes)
            if activity is None:
                break
            week_activities.append(activity)
            i += 1

    return week_days, week_activities, i


def reconstruct_grid(calendar_tokens: List[str], year: int, month: int,
                     appointment_codes: Optional[Iterable[str]] = None) -> Dict[int, List[Activity]]:
    """
    Проходит тело календаря неделя за неделей и возвращает словарь
    {номер дня: список активностей}. Все встреченные дни получают запись,
    в том числе пустую.
    """
    first_day_column = first_weekday_column(year, month)
    day_activities: Dict[int, List[Activity]] = {}

    i = 0
    weeks_found = 0
    while i < len(calendar_tokens):
        week_days, week_activities, i = _read_week(calendar_tokens, i, appointment_codes)

        if not week_days:
            # Токен не похож ни на номер дня, ни на начало недели
            log.debug(f"Пропуск постороннего токена: '{calendar_tokens[i]}'")
            i += 1
            continue

        weeks_found += 1
        for day in week_days:
            day_activities.setdefault(day, [])

        column_to_day = map_week_columns(week_days, first_day_column)
        assign_week_activities(column_to_day, week_activities, day_activities)

    log.info(f"Восстановлено недель: {weeks_found}, дней с данными: {len(day_activities)}")
    return day_activities
