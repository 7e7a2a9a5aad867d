# app/utils.py

from datetime import date, datetime, time as time_obj
from dataclasses import is_dataclass, asdict


def make_json_serializable(data):
    """
    Рекурсивно преобразует объекты, которые не сериализуются в JSON,
    в подходящий формат (строки, словари, списки).
    """
    # Дата-класс превращаем в словарь и снова пропускаем через эту же функцию,
    # чтобы обработать вложенные даты и время
    if is_dataclass(data):
        return make_json_serializable(asdict(data))

    if isinstance(data, dict):
        return {k: make_json_serializable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [make_json_serializable(i) for i in data]
    # datetime - подкласс date, поэтому проверяется первым
    if isinstance(data, datetime):
        return data.isoformat(timespec='minutes')
    if isinstance(data, date):
        return data.isoformat()
    if isinstance(data, time_obj):
        return data.strftime('%H:%M')

    return data
