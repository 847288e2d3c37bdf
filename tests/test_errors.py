"""Tests for error mapping.

Every failure maps to one of NotFound/Forbidden/BadRequest/InternalError,
and internal failure text only appears in debug mode.
"""

from sqlalchemy.exc import OperationalError

from video_catalog.catalog.errors import (
    BadRequestError,
    FieldError,
    ForbiddenError,
    InternalError,
    MalformedIdentifierError,
    NotFoundError,
    field_errors_from_validation,
    map_exception,
)


class TestMapException:
    """Test map_exception."""

    def test_not_found(self):
        payload = map_exception(NotFoundError())
        assert payload.status_code == 404
        assert payload.body == {"message": "Video not found"}

    def test_malformed_identifier_is_not_found(self):
        payload = map_exception(MalformedIdentifierError("not-an-id"))
        assert payload.status_code == 404
        assert payload.body == {"message": "Video not found"}

    def test_forbidden(self):
        payload = map_exception(ForbiddenError("Not authorized to update this video"))
        assert payload.status_code == 403
        assert payload.body["message"] == "Not authorized to update this video"

    def test_bad_request_carries_field_errors(self):
        payload = map_exception(BadRequestError([FieldError("rating", "too big")]))
        assert payload.status_code == 400
        assert payload.body["errors"] == [{"field": "rating", "message": "too big"}]
        assert "message" in payload.body

    def test_store_failure_hidden_by_default(self):
        exc = OperationalError("SELECT 1", {}, Exception("disk I/O error"))
        payload = map_exception(exc)
        assert payload.status_code == 500
        assert payload.body == {"message": "Server error"}

    def test_unclassified_failure_hidden_by_default(self):
        payload = map_exception(RuntimeError("secret internals"))
        assert payload.status_code == 500
        assert "secret internals" not in str(payload.body)

    def test_unclassified_failure_shown_in_debug(self):
        payload = map_exception(RuntimeError("secret internals"), debug=True)
        assert payload.status_code == 500
        assert payload.body["error"] == "secret internals"

    def test_internal_error_detail_in_debug(self):
        payload = map_exception(InternalError(detail="boom"), debug=True)
        assert payload.body == {"message": "Server error", "error": "boom"}

    def test_internal_error_detail_hidden(self):
        payload = map_exception(InternalError(detail="boom"))
        assert payload.body == {"message": "Server error"}


class TestFieldErrorsFromValidation:
    """Test conversion of pydantic error lists."""

    def test_strips_location_prefix(self):
        errors = [{"loc": ("body", "rating"), "msg": "Input should be less than or equal to 5"}]
        assert field_errors_from_validation(errors) == [
            FieldError("rating", "Input should be less than or equal to 5")
        ]

    def test_strips_value_error_prefix(self):
        errors = [{"loc": ("body", "videoUrl"), "msg": "Value error, Please provide a valid URL"}]
        assert field_errors_from_validation(errors)[0].message == "Please provide a valid URL"

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "msg": "Field required"}]
        assert field_errors_from_validation(errors)[0].field == "body"

    def test_nested_location_joined(self):
        errors = [{"loc": ("body", "actress", 1), "msg": "bad"}]
        assert field_errors_from_validation(errors)[0].field == "actress.1"
