"""Tests for domain exception classes"""

from careercraft.errors import (
    CareerCraftError,
    GenerationFailed,
    MalformedResponse,
    MissingInput,
    NotFound,
    PersistenceFailed,
    Unauthorized,
    UserNotFound,
    _missing_fields,
)


class TestCareerCraftError:
    def test_defaults(self):
        exc = CareerCraftError()
        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"
        assert exc.to_dict() == {"error": exc.message, "error_code": "INTERNAL_ERROR", "details": {}}

    def test_status_codes(self):
        assert Unauthorized().status_code == 401
        assert UserNotFound().status_code == 404
        assert MissingInput().status_code == 400
        assert MalformedResponse().status_code == 502
        assert GenerationFailed().status_code == 502
        assert PersistenceFailed().status_code == 500


class TestSubclasses:
    def test_not_found_message(self):
        assert NotFound("Cover letter").message == "Cover letter not found"

    def test_missing_input_field(self):
        exc = MissingInput("Industry is required", field="industry")
        assert exc.details == {"field": "industry"}
        assert exc.to_dict()["error"] == "Industry is required"


class TestValidationErrors:
    """Absent body fields render as MissingInput instead of FastAPI's 422."""

    def test_missing_field_names_collected(self):
        errors = [
            {"type": "missing", "loc": ("body", "industry"), "input": {}},
            {"type": "string_type", "loc": ("body", "bio"), "input": None},
            {"type": "int_parsing", "loc": ("body", "experience"), "input": "lots"},
        ]
        assert _missing_fields(errors) == ["industry", "bio"]

    def test_whole_body_missing(self):
        assert _missing_fields([{"type": "missing", "loc": ("body",), "input": None}]) == ["body"]
