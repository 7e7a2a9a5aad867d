# app/services/parsers/header_parser.py

import logging
import re
from dataclasses import dataclass, field
from typing import List

log = logging.getLogger(__name__)


MONTH_NAMES = (
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december'
)

# "January-RAL2026" или "January-RAL" (год тогда идёт следующим токеном)
HEADER_PATTERN = re.compile(r'^([A-Za-z]+)-([A-Z]+)(\d{4})?$')
YEAR_PATTERN = re.compile(r'^\d{4}$')


@dataclass
class ScheduleHeader:
    """Поля заголовка документа. ok=False - дальше разбирать нельзя."""
    month: int = 0
    year: int = 0
    location_code: str = ''
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def tokenize(text: str) -> List[str]:
    """Разбивает извлечённый текст на токены по любым пробельным символам."""
    if not text:
        return []
    return text.split()


def parse_header(tokens: List[str]) -> ScheduleHeader:
    """
    Извлекает месяц, год и код локации из первых токенов.
    Ошибки не выбрасываются, а возвращаются в поле errors.
    """
    header = ScheduleHeader()
    if not tokens:
        header.errors.append('Empty document')
        return header

    header_token = tokens[0]
    match = HEADER_PATTERN.match(header_token)
    if not match:
        log.warning(f"Не удалось разобрать заголовок документа: '{header_token}'")
        header.errors.append(f'Could not parse header: {header_token}')
        return header

    month_name, location_code, embedded_year = match.groups()
    header.location_code = location_code

    if embedded_year:
        header.year = int(embedded_year)
    elif len(tokens) > 1 and YEAR_PATTERN.match(tokens[1]):
        # Год вынесен в отдельный токен: "January-RAL 2026"
        header.year = int(tokens[1])

    if month_name.lower() not in MONTH_NAMES:
        log.warning(f"Неизвестный месяц в заголовке: '{month_name}'")
        header.errors.append(f'Could not parse header: {header_token}')
        header.errors.append(f'Unknown month: {month_name}')
        return header

    header.month = MONTH_NAMES.index(month_name.lower())

    if not header.year:
        log.warning(f"Не удалось определить год для заголовка '{header_token}'")
        header.errors.append('Could not determine year')
        return header

    log.info(f"Заголовок: месяц={header.month + 1}, год={header.year}, локация={header.location_code}")
    return header
