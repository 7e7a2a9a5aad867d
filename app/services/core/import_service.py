# app/services/core/import_service.py

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from config import Config
from app.utils import make_json_serializable

from app.services.utils.docx_reader import extract_docx_text
from app.services.parsers.common_structs import ParsedSchedule
from app.services.parsers.schedule_parser import parse_schedule_text
from app.services.core.shift_generator import schedule_to_shifts


log = logging.getLogger(__name__)


@dataclass
class ShiftOptions:
    """Параметры генерации смен, которые присылает оператор при импорте."""
    zone_name: str
    shift_type: str
    shift_duration_minutes: int = Config.SHIFT_DURATION_MINUTES
    offset_before_minutes: int = Config.OFFSET_BEFORE_MINUTES
    title: Optional[str] = None


def parse_text(text: str) -> ParsedSchedule:
    """Разбирает уже извлечённый текст со словарём кодов приёма из конфига."""
    return parse_schedule_text(text, appointment_codes=Config.APPOINTMENT_CODES or None)


def parse_schedule_document(source: Union[str, BinaryIO]) -> ParsedSchedule:
    """
    Читает .docx и разбирает его текст.
    Нечитаемый документ даёт расписание с ошибкой, а не исключение.
    """
    text = extract_docx_text(source)
    if text is None:
        return ParsedSchedule(errors=['Could not read document'])
    return parse_text(text)


def build_import_preview(schedule: ParsedSchedule, options: ShiftOptions) -> dict:
    """
    Собирает предпросмотр импорта: сводку разбора, черновики смен и предупреждения.
    Результат готов к отдаче в JSON.
    """
    shifts = schedule_to_shifts(
        schedule,
        zone_name=options.zone_name,
        shift_type=options.shift_type,
        shift_duration_minutes=options.shift_duration_minutes,
        offset_before_minutes=options.offset_before_minutes,
        title=options.title,
    )

    if schedule.errors:
        log.warning(f"Расписание '{schedule.location_code}' разобрано с ошибками: {schedule.errors}")

    return make_json_serializable({
        "parsed": {
            "month": schedule.month + 1,  # 1-12 для отображения
            "year": schedule.year,
            "location_code": schedule.location_code,
            "days_found": len(schedule.days),
        },
        "shifts": shifts,
        "warnings": schedule.errors,
    })
