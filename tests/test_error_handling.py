"""ABOUTME: Tests for picker errors, status mapping and error payloads."""

import httpx
import pytest

from item_picker.error_handling import (
    ERROR_FETCH_FAILED,
    ERROR_INVALID_PARAMETER,
    ERROR_INVALID_QUERY,
    ERROR_NETWORK_ERROR,
    ERROR_NOT_FOUND,
    ERROR_RATE_LIMITED,
    ERROR_RESOLUTION_TYPE,
    ERROR_UNEXPECTED,
    ERROR_VALIDATION_FAILED,
    HTTPStatusCodes,
    NotFoundError,
    PickerError,
    QueryError,
    ResolutionError,
    ResolutionTypeError,
    TransportError,
    create_error_payload,
    create_picker_error,
    create_validation_error,
    status_code_for,
)
from item_picker.http_utils import extract_error_code, extract_error_message, interpret_http_error


class TestExceptions:
    """Tests for the picker exception hierarchy."""

    def test_default_codes(self):
        assert PickerError("x").code == ERROR_UNEXPECTED
        assert QueryError("x").code == ERROR_INVALID_QUERY
        assert ResolutionTypeError("x").code == ERROR_RESOLUTION_TYPE
        assert NotFoundError("x").code == ERROR_NOT_FOUND
        assert TransportError("x").code == ERROR_NETWORK_ERROR

    def test_code_override_is_per_instance(self):
        error = TransportError("slow", code="timeout", status_code=504)
        assert error.code == "timeout"
        assert error.status_code == 504
        assert TransportError("other").code == ERROR_NETWORK_ERROR

    def test_hierarchy(self):
        assert issubclass(QueryError, ResolutionError)
        assert issubclass(ResolutionTypeError, ResolutionError)
        assert issubclass(TransportError, PickerError)

    def test_message(self):
        error = ResolutionTypeError("Your query must return a set of users")
        assert error.message == str(error)

    @pytest.mark.parametrize(
        "error, status",
        [
            (NotFoundError("x"), 404),
            (QueryError("x"), 422),
            (ResolutionTypeError("x"), 422),
            (PickerError("x"), 500),
        ],
    )
    def test_status_code_for(self, error, status):
        assert status_code_for(error) == status


class TestPayloads:
    """Tests for JSON error bodies."""

    def test_create_error_payload(self):
        payload = create_error_payload("bad", ERROR_INVALID_QUERY, "resolution_error", {"query": "x.y"})
        assert payload == {
            "error": {"code": ERROR_INVALID_QUERY, "message": "bad", "type": "resolution_error", "query": "x.y"}
        }

    def test_create_picker_error(self):
        payload = create_picker_error(ResolutionTypeError("Your query must return a set of files"))
        assert payload["error"]["code"] == ERROR_RESOLUTION_TYPE
        assert payload["error"]["type"] == "resolution_error"

    def test_create_validation_error(self):
        error = create_validation_error("parent", "bad reference", "home")["error"]
        assert error["code"] == ERROR_VALIDATION_FAILED
        assert error["message"] == "parent: bad reference"
        assert error["field_value"] == "home"


class TestHttpHelpers:
    """Tests for HTTP status interpretation and body parsing."""

    @pytest.mark.parametrize(
        "status, code",
        [
            (429, ERROR_RATE_LIMITED),
            (404, ERROR_NOT_FOUND),
            (422, ERROR_VALIDATION_FAILED),
            (502, ERROR_FETCH_FAILED),
            (400, ERROR_INVALID_PARAMETER),
            (302, ERROR_NETWORK_ERROR),
        ],
    )
    def test_interpret_http_error(self, status, code):
        assert interpret_http_error(status) == code

    def test_status_helpers(self):
        assert HTTPStatusCodes.is_client_error(418)
        assert not HTTPStatusCodes.is_server_error(499)

    def test_extract_from_picker_body(self):
        response = httpx.Response(422, json=create_picker_error(QueryError("Malformed query: 'site.'")))
        assert extract_error_message(response) == "Malformed query: 'site.'"
        assert extract_error_code(response) == ERROR_INVALID_QUERY

    def test_extract_from_fastapi_detail(self):
        response = httpx.Response(
            422, json={"detail": [{"loc": ["query", "limit"], "msg": "Input should be greater than or equal to 1"}]}
        )
        assert extract_error_message(response) == "query.limit: Input should be greater than or equal to 1"
        assert extract_error_code(response) is None

    def test_extract_from_plain_text(self):
        response = httpx.Response(500, text="boom")
        assert extract_error_message(response) is None
        assert extract_error_code(response) is None
