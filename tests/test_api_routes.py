import io
import json

import pytest


VALID_OPTIONS = {"zoneName": "North Wake", "shiftType": "patrol"}


def _upload(client, content, filename="january.docx", options=VALID_OPTIONS):
    data = {"file": (io.BytesIO(content), filename)}
    if options is not None:
        data["options"] = options if isinstance(options, str) else json.dumps(options)
    return client.post("/api/shifts/import-schedule", data=data, content_type="multipart/form-data")


class TestImportSchedule:

    def test_preview(self, client, january_docx):
        response = _upload(client, january_docx)

        assert response.status_code == 200
        body = response.get_json()
        assert body["parsed"] == {"month": 1, "year": 2026, "location_code": "RAL", "days_found": 2}
        assert body["warnings"] == []
        assert body["message"] == "Prepared 2 shifts for import"
        assert body["shifts"][0] == {
            "title": "RAL - Jan 2",
            "date": "2026-01-02",
            "start_time": "2026-01-02T08:00",
            "end_time": "2026-01-02T10:00",
            "zone_name": "North Wake",
            "shift_type": "patrol",
        }
        assert body["shifts"][1]["start_time"] == "2026-01-03T08:30"

    def test_custom_window_and_title(self, client, january_docx):
        options = dict(VALID_OPTIONS, shiftDurationMinutes=180, offsetBeforeMinutes=60, title="Clinic")

        body = _upload(client, january_docx, options=options).get_json()

        assert body["shifts"][0]["title"] == "Clinic"
        assert body["shifts"][0]["start_time"] == "2026-01-02T07:30"
        assert body["shifts"][0]["end_time"] == "2026-01-02T10:30"

    def test_zero_minutes_fall_back_to_defaults(self, client, january_docx):
        options = dict(VALID_OPTIONS, shiftDurationMinutes=0, offsetBeforeMinutes=0)

        body = _upload(client, january_docx, options=options).get_json()

        assert body["shifts"][0]["start_time"] == "2026-01-02T08:00"
        assert body["shifts"][0]["end_time"] == "2026-01-02T10:00"

    def test_no_file(self, client):
        response = client.post("/api/shifts/import-schedule", data={"options": json.dumps(VALID_OPTIONS)},
                               content_type="multipart/form-data")

        assert response.status_code == 400
        assert response.get_json() == {"error": "No file provided"}

    def test_wrong_extension(self, client, january_docx):
        response = _upload(client, january_docx, filename="january.pdf")

        assert response.status_code == 400
        assert response.get_json() == {"error": "File must be a .docx document"}

    @pytest.mark.parametrize("options", [
        "{not json",
        "[1, 2]",
        json.dumps(dict(VALID_OPTIONS, shiftDurationMinutes="two hours")),
        json.dumps(dict(VALID_OPTIONS, offsetBeforeMinutes=-15)),
    ])
    def test_invalid_options(self, client, january_docx, options):
        response = _upload(client, january_docx, options=options)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid options format"}

    def test_zone_required(self, client, january_docx):
        response = _upload(client, january_docx, options=None)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Zone is required"}

    def test_shift_type_required(self, client, january_docx):
        response = _upload(client, january_docx, options={"zoneName": "North Wake"})

        assert response.status_code == 400
        assert response.get_json() == {"error": "Shift type is required"}

    def test_unparseable_document(self, client, calendar_docx):
        content = calendar_docx("Schedule 2026", [[(1, "DE-8:30")] + [None] * 6])

        response = _upload(client, content)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Failed to parse schedule",
                                       "details": ["Could not parse header: Schedule"]}

    def test_unreadable_document(self, client):
        response = _upload(client, b"not a docx at all")

        assert response.status_code == 400
        assert response.get_json()["details"] == ["Could not read document"]

    def test_no_shifts(self, client, calendar_docx):
        # 1 февраля 2026 - воскресенье
        week = [(1, "CLOSED"), (2, "ADMIN"), None, None, None, None, None]
        content = calendar_docx("February-RAL2026", [week])

        response = _upload(client, content)

        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "No shifts found in schedule"
        assert body["details"] == []
        assert body["parsed"]["month"] == 2


class TestParseText:

    def test_parse(self, client, january_text):
        response = client.post("/api/schedule/parse", json={"text": january_text})

        assert response.status_code == 200
        body = response.get_json()
        assert body["month"] == 0
        assert body["location_code"] == "RAL"
        assert body["days"][0] == {
            "date": "2026-01-02",
            "appointment_type": "DE",
            "appointment_time": "8:30",
            "is_closed": False,
            "is_admin": False,
        }

    def test_empty_document(self, client):
        body = client.post("/api/schedule/parse", json={"text": ""}).get_json()

        assert body == {"month": 0, "year": 0, "location_code": "", "days": [], "errors": ["Empty document"]}

    @pytest.mark.parametrize("payload", [{}, {"text": 42}])
    def test_text_required(self, client, payload):
        response = client.post("/api/schedule/parse", json=payload)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Text is required"}
