# app/services/parsers/common_structs.py

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass(frozen=True)
class Activity:
    """
    Одна активность из ячейки календаря: код ('DE', 'CLOSED')
    и, если было указано, время приёма ('8:30').
    """
    code: str
    time: Optional[str] = None


@dataclass
class ScheduleDay:
    """День клиники, для которого будет создана смена."""
    date: date
    appointment_type: str  # DE, MM, CONSULTS и т.п.
    appointment_time: str  # "8:30"
    is_closed: bool = False
    is_admin: bool = False


@dataclass
class ParsedSchedule:
    """
    Результат разбора документа. Ошибки не обязательно означают пустой результат:
    частично разобранное расписание с ошибками - допустимое состояние.
    """
    month: int = 0  # 0-11
    year: int = 0
    location_code: str = ''  # например, "RAL"
    days: List[ScheduleDay] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
