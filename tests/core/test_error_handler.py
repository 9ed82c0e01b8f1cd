"""
Tests for error handler.

This module tests the exception types, API request handling and the
best-effort / required step decorators.
"""

import json
import pytest
from unittest.mock import MagicMock
import requests

from creativebuilder.core.error_handler import (
    APIError,
    ValidationError,
    ConfigurationError,
    GenerationError,
    PipelineCancelled,
    handle_api_request,
    best_effort,
    required
)


class TestErrorHandler:
    """
    Tests for the error handler module.
    """

    def test_api_error(self):
        """
        Test APIError exception.
        """
        error = APIError("Test error")

        assert str(error) == "API Error: Test error"
        assert error.message == "Test error"
        assert error.status_code is None
        assert error.endpoint is None

        error = APIError(
            message="Test error",
            status_code=404,
            response="Not found",
            endpoint="https://api.example.com",
            request_data={"param": "value"}
        )

        assert "API Error: Test error (Status Code: 404) (Endpoint: https://api.example.com)" in str(error)
        assert error.response == "Not found"
        assert error.request_data == {"param": "value"}

    def test_validation_error(self):
        """
        Test ValidationError exception.
        """
        error = ValidationError("Test error", field="product_image", value="cup.txt")

        assert "Validation Error: Test error (Field: product_image)" in str(error)
        assert error.field == "product_image"
        assert error.value == "cup.txt"

    def test_configuration_error(self):
        """
        Test ConfigurationError exception.
        """
        error = ConfigurationError("Test error", component="credentials", missing_keys=["GEMINI_API_KEY"])

        assert "Configuration Error: Test error" in str(error)
        assert "(Component: credentials)" in str(error)
        assert "(Missing Keys: GEMINI_API_KEY)" in str(error)
        assert error.missing_keys == ["GEMINI_API_KEY"]

    def test_generation_error_message_is_user_facing(self):
        error = GenerationError("Failed to generate images.")

        assert str(error) == "Failed to generate images."
        assert error.message == "Failed to generate images."
        assert isinstance(PipelineCancelled("cancelled"), GenerationError)

    def test_handle_api_request_success(self):
        """
        Test handle_api_request with a successful request.
        """
        mock_response = MagicMock()
        mock_response.json.return_value = {"result": "success"}
        mock_request_func = MagicMock(return_value=mock_response)

        result = handle_api_request(
            mock_request_func,
            "https://api.example.com",
            {"param": "value"},
            {"Authorization": "Bearer token"},
            timeout=30
        )

        assert result == {"result": "success"}
        mock_request_func.assert_called_once_with(
            "https://api.example.com",
            json={"param": "value"},
            headers={"Authorization": "Bearer token"},
            timeout=30
        )

    def test_handle_api_request_http_error(self):
        """
        Test handle_api_request with an HTTP error.
        """
        mock_response = MagicMock()
        mock_response.status_code = 429
        mock_response.text = "Rate limited"
        http_error = requests.exceptions.HTTPError("429 Client Error", response=mock_response)
        mock_response.raise_for_status.side_effect = http_error
        mock_request_func = MagicMock(return_value=mock_response)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(
                mock_request_func,
                "https://api.example.com",
                {"param": "value"},
                {},
                error_message="Test error"
            )

        assert excinfo.value.status_code == 429
        assert excinfo.value.response == "Rate limited"
        assert excinfo.value.message.startswith("Test error")

    @pytest.mark.parametrize("exception, expected", [
        (requests.exceptions.ConnectionError("refused"), "Test error: Connection error"),
        (requests.exceptions.Timeout("slow"), "Test error: Request timed out"),
        (requests.exceptions.RequestException("boom"), "Test error: boom"),
    ])
    def test_handle_api_request_transport_errors(self, exception, expected):
        mock_request_func = MagicMock(side_effect=exception)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(mock_request_func, "https://api.example.com", {}, {}, error_message="Test error")

        assert excinfo.value.message == expected

    def test_handle_api_request_invalid_json(self):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = "not json"
        mock_response.json.side_effect = json.JSONDecodeError("Expecting value", "not json", 0)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(MagicMock(return_value=mock_response), "https://api.example.com", {}, {})

        assert "Failed to parse API response" in excinfo.value.message


class _Step:
    """Minimal object with decorated methods."""

    def __init__(self, error=None):
        self.error = error

    @best_effort("Polishing")
    def polish(self, value, suffix):
        if self.error:
            raise self.error
        return value + suffix

    @required("Failed to build")
    def build(self):
        if self.error:
            raise self.error
        return "built"


class TestStepDecorators:
    """
    Tests for the fail-open and fail-closed step decorators.
    """

    def test_best_effort_returns_result(self):
        assert _Step().polish("text", "!") == "text!"

    @pytest.mark.parametrize("error", [APIError("down"), ValueError("bad json"), GenerationError("nope")])
    def test_best_effort_returns_original_on_error(self, error):
        assert _Step(error).polish("text", "!") == "text"

    def test_best_effort_keyword_call_returns_original_on_error(self):
        assert _Step(APIError("down")).polish(value="text", suffix="!") == "text"
        assert _Step(APIError("down")).polish("text", suffix="!") == "text"

    def test_best_effort_keyword_call_returns_result(self):
        assert _Step().polish(suffix="!", value="text") == "text!"

    def test_required_returns_result(self):
        assert _Step().build() == "built"

    def test_required_wraps_api_error(self):
        with pytest.raises(GenerationError) as excinfo:
            _Step(APIError("Service unavailable", status_code=503)).build()

        assert excinfo.value.message == "Failed to build: Service unavailable"
        assert isinstance(excinfo.value.__cause__, APIError)

    def test_required_wraps_other_errors(self):
        with pytest.raises(GenerationError) as excinfo:
            _Step(KeyError("headline")).build()

        assert excinfo.value.message.startswith("Failed to build: ")

    def test_required_passes_generation_error_through(self):
        original = GenerationError("Failed to generate valid ad copy.")

        with pytest.raises(GenerationError) as excinfo:
            _Step(original).build()

        assert excinfo.value is original
