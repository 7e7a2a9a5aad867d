"""
Pytest configuration and shared fixtures.
"""

import io

import pytest
from docx import Document

from config import Config
from app import create_app


WEEKDAY_HEADER = "Sunday Monday Tuesday Wednesday Thursday Friday Saturday"

# Январь 2026: первое число - четверг
JANUARY_2026_TEXT = f"""
January-RAL2026
Clinic Schedule
{WEEKDAY_HEADER}
1 2 3
CLOSED DE-8:30 MM-9:30 CONSULTS
4 5 6 7 8 9 10
CLOSED DE-8:30 MM-9:30 MM-10:00 DE-9:00 ADMIN CONSULTS DE-7:45 CLOSED
"""


class TestConfig(Config):
    TESTING = True


@pytest.fixture
def january_text():
    """Текст месячного календаря, каким его отдаёт извлечение из .docx."""
    return JANUARY_2026_TEXT


def build_calendar_docx(header: str, weeks: list) -> bytes:
    """
    Собирает .docx как у клиники: заголовок абзацем, затем таблица 7 колонок,
    где под строкой с номерами дней идёт строка с активностями.
    weeks - список недель, неделя - список из 7 ячеек (None для пустой) вида (день, "DE-8:30 MM-9:30").
    """
    document = Document()
    document.add_paragraph(header)

    table = document.add_table(rows=1 + 2 * len(weeks), cols=7)
    for col, name in enumerate(WEEKDAY_HEADER.split()):
        table.cell(0, col).text = name

    for week_idx, week in enumerate(weeks):
        numbers_row = 1 + 2 * week_idx
        for col, cell in enumerate(week):
            if cell is None:
                continue
            day, activities = cell
            table.cell(numbers_row, col).text = str(day)
            table.cell(numbers_row + 1, col).text = activities

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def calendar_docx():
    return build_calendar_docx


@pytest.fixture
def january_docx():
    """Первая неделя января 2026 в виде .docx."""
    first_week = [None, None, None, None,
                  (1, "CLOSED"), (2, "DE-8:30 MM-9:30"), (3, "CONSULTS")]
    return build_calendar_docx("January-RAL2026", [first_week])


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
