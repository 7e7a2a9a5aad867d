# app/api_routes.py

import json
import logging
from flask import Blueprint, jsonify, request

from config import Config
from app.utils import make_json_serializable
from .services.core import import_service


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


class OptionsError(ValueError):
    """Некорректные параметры импорта от клиента."""


def _minutes_option(options: dict, key: str, default: int) -> int:
    value = options.get(key)
    if not value:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise OptionsError(f"'{key}' must be a non-negative integer")
    return value


def _read_options(raw_options: str) -> dict:
    """Разбирает JSON-строку options из формы. Пустая строка = пустые параметры."""
    if not raw_options:
        return {}
    try:
        options = json.loads(raw_options)
    except json.JSONDecodeError as e:
        raise OptionsError(str(e))
    if not isinstance(options, dict):
        raise OptionsError("options must be a JSON object")
    return options


@bp.route('/shifts/import-schedule', methods=['POST'])
def import_schedule():
    """Разбирает загруженный .docx с расписанием клиники и отдаёт предпросмотр смен."""
    file = request.files.get('file')
    if not file:
        return jsonify({"error": "No file provided"}), 400

    if not (file.filename or '').lower().endswith('.docx'):
        return jsonify({"error": "File must be a .docx document"}), 400

    try:
        options = _read_options(request.form.get('options', ''))
        shift_duration = _minutes_option(options, 'shiftDurationMinutes', Config.SHIFT_DURATION_MINUTES)
        offset_before = _minutes_option(options, 'offsetBeforeMinutes', Config.OFFSET_BEFORE_MINUTES)
    except OptionsError as e:
        log.warning(f"API: некорректные параметры импорта: {e}")
        return jsonify({"error": "Invalid options format"}), 400

    if not options.get('zoneName'):
        return jsonify({"error": "Zone is required"}), 400
    if not options.get('shiftType'):
        return jsonify({"error": "Shift type is required"}), 400

    log.info(f"API request for schedule import: '{file.filename}'")

    try:
        schedule = import_service.parse_schedule_document(file.stream)

        if schedule.errors and not schedule.days:
            log.warning(f"API: файл '{file.filename}' не удалось разобрать: {schedule.errors}")
            return jsonify({"error": "Failed to parse schedule", "details": schedule.errors}), 400

        shift_options = import_service.ShiftOptions(
            zone_name=str(options['zoneName']),
            shift_type=str(options['shiftType']),
            shift_duration_minutes=shift_duration,
            offset_before_minutes=offset_before,
            title=options.get('title') or None,
        )
        preview = import_service.build_import_preview(schedule, shift_options)
    except Exception as e:
        log.error(f"Ошибка при импорте расписания '{file.filename}': {e}", exc_info=True)
        return jsonify({"error": "Failed to import schedule"}), 500

    if not preview["shifts"]:
        return jsonify({
            "error": "No shifts found in schedule",
            "details": schedule.errors,
            "parsed": preview["parsed"],
        }), 400

    preview["message"] = f"Prepared {len(preview['shifts'])} shifts for import"
    log.info(f"API: Предпросмотр импорта '{file.filename}' успешно отправлен.")
    return jsonify(preview)


@bp.route('/schedule/parse', methods=['POST'])
def parse_schedule():
    """Разбирает уже извлечённый текст документа и отдаёт ParsedSchedule в JSON."""
    payload = request.get_json(silent=True) or {}
    text = payload.get('text') if isinstance(payload, dict) else None
    if not isinstance(text, str):
        return jsonify({"error": "Text is required"}), 400

    schedule = import_service.parse_text(text)
    log.info(f"API: разобран текст расписания, дней со сменами: {len(schedule.days)}")
    return jsonify(make_json_serializable(schedule))
