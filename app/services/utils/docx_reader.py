# app/services/utils/docx_reader.py

import logging
from typing import BinaryIO, List, Optional, Union

from docx import Document
from docx.table import Table

log = logging.getLogger(__name__)


def _table_lines(table: Table) -> List[str]:
    """
    Текст ячеек таблицы построчно, слева направо.
    Объединённые ячейки (и по горизонтали, и по вертикали) выводятся один раз:
    python-docx отдаёт верхнюю ячейку объединения в каждой строке, которую она занимает.
    """
    lines = []
    seen_cells = set()
    for row in table.rows:
        for cell in row.cells:
            if cell._tc in seen_cells:
                continue
            seen_cells.add(cell._tc)
            lines.append(cell.text)
    return lines


def extract_docx_text(source: Union[str, BinaryIO]) -> Optional[str]:
    """
    Открывает .docx (путь или бинарный поток) и возвращает весь видимый текст
    в порядке чтения: абзацы и ячейки таблиц.
    Возвращает None в случае ошибки.
    """
    try:
        log.info("Извлечение текста из .docx документа...")
        document = Document(source)

        lines = []
        for block in document.iter_inner_content():
            if isinstance(block, Table):
                lines.extend(_table_lines(block))
            else:
                lines.append(block.text)
    except Exception as e:
        log.error(f"Не удалось прочитать .docx документ. Ошибка: {e}")
        return None

    text = "\n".join(line for line in lines if line.strip())
    log.info(f"Из документа извлечено {len(text)} символов.")
    return text
