import re
from typing import Iterable, Optional

from .enums import NoShiftCode

NO_SHIFT_CODES = frozenset(code.value for code in NoShiftCode)

TIMED_ACTIVITY_PATTERN = re.compile(r'^([A-Z]+)-(\d{1,2}:\d{2})$')
APPOINTMENT_CODE_PATTERN = re.compile(r'^[A-Z]+$')
DAY_NUMBER_PATTERN = re.compile(r'^[0-9]{1,2}$')


def normalize_activity(activity: str) -> str:
    """Приводит код активности к виду для сравнения: 'Admin', ' admin' -> 'ADMIN'."""
    return str(activity).strip().upper()


def is_no_shift_activity(activity: str) -> bool:
    """Проверяет, запрещает ли активность создание смены в этот день (CLOSED, ADMIN)."""
    return normalize_activity(activity) in NO_SHIFT_CODES


def is_appointment_code(code: str, appointment_codes: Optional[Iterable[str]] = None) -> bool:
    """
    Проверяет, является ли код типом приёма.
    Без словаря организации подходит любой код из заглавных латинских букв,
    кроме зарезервированных. Со словарём - только его элементы.
    """
    normalized = normalize_activity(code)
    if normalized in NO_SHIFT_CODES:
        return False
    if appointment_codes:
        return normalized in {normalize_activity(c) for c in appointment_codes}
    return bool(APPOINTMENT_CODE_PATTERN.fullmatch(normalized))


def parse_day_number(token: str) -> Optional[int]:
    """Возвращает номер дня месяца (1-31), если токен им является."""
    if not DAY_NUMBER_PATTERN.match(token):
        return None
    day = int(token)
    if 1 <= day <= 31:
        return day
    return None


def time_to_minutes(time_str: str) -> int:
    """'8:30' -> 510."""
    hours, minutes = map(int, time_str.split(':'))
    return hours * 60 + minutes


def compare_time_strings(a: str, b: str) -> int:
    """
    Сравнивает два времени формата ЧЧ:ММ.
    Отрицательное число, если a раньше b, положительное - если позже, 0 - если равны.
    """
    return time_to_minutes(a) - time_to_minutes(b)
