"""
Error handling module.

This module provides the exception types used across the package, the
wrapper that turns ``requests`` failures into ``APIError``, and the two
propagation strategies used by the generation pipeline:

- ``required``: the step is load-bearing, so any failure aborts the run as a
  ``GenerationError``.
- ``best_effort``: the step only polishes its input, so any failure is logged
  and the original input is returned.
"""

import json
import logging
import functools
import inspect
from typing import Dict, Any, Optional, Callable

import requests

logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Exception raised for API errors.

    Attributes:
        message: Error message.
        status_code: HTTP status code.
        response: API response.
        endpoint: API endpoint.
        request_data: Request data.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
        endpoint: Optional[str] = None,
        request_data: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.endpoint = endpoint
        self.request_data = request_data

        detailed_message = f"API Error: {message}"
        if status_code:
            detailed_message += f" (Status Code: {status_code})"
        if endpoint:
            detailed_message += f" (Endpoint: {endpoint})"

        super().__init__(detailed_message)


class ValidationError(Exception):
    """
    Exception raised for validation errors.

    Attributes:
        message: Error message.
        field: Field that failed validation.
        value: Value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        self.message = message
        self.field = field
        self.value = value

        detailed_message = f"Validation Error: {message}"
        if field:
            detailed_message += f" (Field: {field})"

        super().__init__(detailed_message)


class ConfigurationError(Exception):
    """
    Exception raised for configuration errors.

    Attributes:
        message: Error message.
        component: Component that has a configuration error.
        missing_keys: Keys that are missing from the configuration.
    """

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        missing_keys: Optional[list] = None
    ):
        self.message = message
        self.component = component
        self.missing_keys = missing_keys or []

        detailed_message = f"Configuration Error: {message}"
        if component:
            detailed_message += f" (Component: {component})"
        if missing_keys:
            detailed_message += f" (Missing Keys: {', '.join(missing_keys)})"

        super().__init__(detailed_message)


class GenerationError(Exception):
    """
    Exception raised when a creative generation run fails.

    The message is human-readable and is what the user sees; a run raises
    exactly one of these and returns no partial results.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PipelineCancelled(GenerationError):
    """Raised when a run is cancelled through its cancel event."""


def handle_api_request(
    request_func: Callable,
    endpoint: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    error_message: str = "API request failed",
    timeout: Optional[float] = None
) -> Dict[str, Any]:
    """
    Make an API request and return its decoded JSON body.

    Args:
        request_func: Function to make the API request (e.g. requests.post).
        endpoint: API endpoint.
        payload: Request payload.
        headers: Request headers.
        error_message: Error message prefix to use if the request fails.
        timeout: Request timeout in seconds.

    Returns:
        API response.

    Raises:
        APIError: If the API request fails or the body is not valid JSON.
    """
    try:
        response = request_func(
            endpoint,
            json=payload,
            headers=headers,
            timeout=timeout
        )
        response.raise_for_status()

    except requests.exceptions.HTTPError as e:
        if e.response is not None:
            status_code = e.response.status_code
            response_text = e.response.text
        else:
            status_code = getattr(response, 'status_code', None)
            response_text = getattr(response, 'text', str(e))

        logger.error(f"HTTP error: {e}")
        logger.debug(f"Response: {response_text}")

        raise APIError(
            message=f"{error_message}: {e}",
            status_code=status_code,
            response=response_text,
            endpoint=endpoint,
            request_data=payload
        ) from e

    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error: {e}")
        raise APIError(
            message=f"{error_message}: Connection error",
            endpoint=endpoint,
            request_data=payload
        ) from e

    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout error: {e}")
        raise APIError(
            message=f"{error_message}: Request timed out",
            endpoint=endpoint,
            request_data=payload
        ) from e

    except requests.exceptions.RequestException as e:
        logger.error(f"Request error: {e}")
        raise APIError(
            message=f"{error_message}: {e}",
            endpoint=endpoint,
            request_data=payload
        ) from e

    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Failed to parse API response: {e}")
        raise APIError(
            message=f"Failed to parse API response: {e}",
            status_code=response.status_code,
            response=response.text,
            endpoint=endpoint,
            request_data=payload
        ) from e


def log_api_error(error: APIError) -> None:
    """
    Log an API error with detailed information.

    Args:
        error: API error to log.
    """
    logger.error(f"API Error: {error.message}")

    if error.status_code:
        logger.error(f"Status Code: {error.status_code}")

    if error.endpoint:
        logger.error(f"Endpoint: {error.endpoint}")

    if error.response:
        logger.error(f"Response: {error.response}")

    if error.request_data:
        safe_request_data = error.request_data.copy()
        for key in safe_request_data:
            if "key" in key.lower() or "token" in key.lower() or "secret" in key.lower():
                safe_request_data[key] = "***REDACTED***"
        # Message bodies can carry base64 images
        if "messages" in safe_request_data:
            safe_request_data["messages"] = "<omitted>"
        logger.error(f"Request Data: {safe_request_data}")


def best_effort(description: str) -> Callable:
    """
    Decorate a step whose failure must not abort the run.

    The wrapped method takes the value to improve as its first parameter
    after ``self``, passed by position or by name. On any exception a warning
    is logged and that value is returned unchanged.

    Args:
        description: What the step does, used in the warning.
    """
    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)
        value_name = list(signature.parameters)[1]

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.warning(f"{description} failed, returning original: {e}")
                return signature.bind_partial(*args, **kwargs).arguments.get(value_name)
        return wrapper
    return decorator


def required(error_message: str) -> Callable:
    """
    Decorate a load-bearing step.

    ``GenerationError`` passes through untouched; any other exception is
    wrapped in ``GenerationError`` with ``error_message`` as its prefix.

    Args:
        error_message: Human-readable description of what failed.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except GenerationError:
                raise
            except APIError as e:
                log_api_error(e)
                raise GenerationError(f"{error_message}: {e.message}") from e
            except Exception as e:
                logger.error(f"{error_message}: {e}")
                raise GenerationError(f"{error_message}: {e}") from e
        return wrapper
    return decorator
