import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # --- Параметры генерации смен ---
    SHIFT_DURATION_MINUTES = int(os.getenv('SHIFT_DURATION_MINUTES', 120))
    OFFSET_BEFORE_MINUTES = int(os.getenv('OFFSET_BEFORE_MINUTES', 30))

    # Словарь кодов приёма организации. Пустой список = любой код в верхнем регистре.
    APPOINTMENT_CODES = [
        code.strip().upper() for code in os.getenv('APPOINTMENT_CODES', '').split(',') if code.strip()
    ]

    # --- Загрузка файлов ---
    MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', 10))
    MAX_CONTENT_LENGTH = MAX_UPLOAD_MB * 1024 * 1024

    # --- Логи ---
    LOG_FILE_MAX_BYTES = int(os.getenv('LOG_FILE_MAX_BYTES', 10240))
    LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', 10))

    # Проверка, что числовые параметры имеют смысл
    if SHIFT_DURATION_MINUTES <= 0:
        raise ValueError("SHIFT_DURATION_MINUTES должен быть положительным числом")
    if OFFSET_BEFORE_MINUTES < 0:
        raise ValueError("OFFSET_BEFORE_MINUTES не может быть отрицательным")
