"""Tests for REST response envelopes."""

from datetime import datetime, timezone

from autotrader.entrypoints.http.error_responses import ApiResponse, ErrorDetail, ErrorResponse


class TestApiResponse:
    """Tests for the success envelope."""

    def test_success_defaults_to_true(self) -> None:
        envelope = ApiResponse[dict](
            message="Car listings retrieved successfully",
            data={"items": []},
            timestamp=datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc),
        )

        assert envelope.success is True
        assert envelope.data == {"items": []}

    def test_serializes_timestamp_as_iso_string(self) -> None:
        envelope = ApiResponse[int](
            message="ok",
            data=1,
            timestamp=datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc),
        )

        result = envelope.model_dump(mode="json")

        assert result == {
            "success": True,
            "message": "ok",
            "data": 1,
            "timestamp": "2026-01-05T10:00:00Z",
        }


class TestErrorDetail:
    """Tests for ErrorDetail model."""

    def test_creates_error_detail_with_all_fields(self) -> None:
        """ErrorDetail can be created with field, message, and code."""
        detail = ErrorDetail(
            field="min_price",
            message="Must be a valid decimal",
            code="INVALID_DECIMAL",
        )

        assert detail.field == "min_price"
        assert detail.message == "Must be a valid decimal"
        assert detail.code == "INVALID_DECIMAL"

    def test_serializes_to_dict_without_code(self) -> None:
        """ErrorDetail serializes with code None when omitted."""
        detail = ErrorDetail(field="page", message="Must be positive")

        assert detail.model_dump() == {
            "field": "page",
            "message": "Must be positive",
            "code": None,
        }


class TestErrorResponse:
    """Tests for ErrorResponse model."""

    def test_creates_simple_error_response(self) -> None:
        """ErrorResponse can be created with just detail and code."""
        response = ErrorResponse(detail="Car not found", code="NOT_FOUND")

        assert response.detail == "Car not found"
        assert response.code == "NOT_FOUND"
        assert response.errors is None

    def test_creates_error_response_with_field_errors(self) -> None:
        """ErrorResponse can include field-level errors."""
        errors = [
            ErrorDetail(field="min_price", message="Must be a valid decimal", code="INVALID_DECIMAL"),
            ErrorDetail(field="max_price", message="Must be a valid decimal", code="INVALID_DECIMAL"),
        ]

        response = ErrorResponse(detail="Validation failed", code="VALIDATION_ERROR", errors=errors)

        assert response.errors == errors

    def test_serializes_to_json(self) -> None:
        response = ErrorResponse(detail="Conflict", code="CONFLICT")

        json_str = response.model_dump_json()

        assert '"detail":"Conflict"' in json_str
        assert '"code":"CONFLICT"' in json_str

    def test_parses_validation_error_from_dict(self) -> None:
        """ErrorResponse can be parsed from dict with errors."""
        data = {
            "detail": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": [
                {
                    "field": "car_id",
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ],
        }

        response = ErrorResponse.model_validate(data)

        assert len(response.errors) == 1
        assert response.errors[0].field == "car_id"
        assert response.errors[0].code == "INVALID_UUID"


class TestSchemaExamples:
    """Examples published in the OpenAPI schema must validate."""

    def test_error_response_examples_are_valid(self) -> None:
        schema = ErrorResponse.model_json_schema()

        assert len(schema["examples"]) >= 2
        for example in schema["examples"]:
            assert ErrorResponse.model_validate(example).code is not None

    def test_error_detail_example_is_valid(self) -> None:
        example = ErrorDetail.model_json_schema()["example"]

        assert ErrorDetail.model_validate(example).code == "INVALID_DECIMAL"
