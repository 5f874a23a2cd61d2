"""Tests for the DRF exception handler."""

from django.db import OperationalError
from rest_framework.exceptions import NotFound

from api.exceptions import AuthenticationRequired, InvalidArgument, TransientError, exception_handler


class TestExceptionHandler:
    """Tests for exception_handler."""

    def test_database_errors_become_retryable_503(self, caplog):
        response = exception_handler(OperationalError("statement timeout"), {"view": None})

        assert response.status_code == 503
        assert response.data["detail"].code == TransientError.default_code
        assert "Database error" in caplog.text

    def test_invalid_argument_is_400(self):
        response = exception_handler(InvalidArgument("Unknown section"), {"view": None})

        assert response.status_code == 400
        assert response.data["detail"] == "Unknown section"

    def test_auth_required_is_401(self):
        response = exception_handler(AuthenticationRequired(), {"view": None})

        assert response.status_code == 401

    def test_other_api_exceptions_pass_through(self):
        response = exception_handler(NotFound(), {"view": None})

        assert response.status_code == 404
