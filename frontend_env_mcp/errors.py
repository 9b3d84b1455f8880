"""Error types for the Figma client and helpers for reporting them to agents."""

import json
import traceback
from collections.abc import Mapping
from typing import Any, Optional

import httpx

_RESPONSE_FIELDS = ("status", "statusText", "headers", "data")


class FigmaError(Exception):
    """Base class for all Figma failures."""


class FigmaCredentialsError(FigmaError):
    """Raised when no Figma access token is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Figma API access token is not set. "
            "Please set the FIGMA_ACCESS_TOKEN environment variable."
        )


class FigmaAPIError(FigmaError):
    """Raised when the Figma API answers with a non-success status."""

    def __init__(self, response: httpx.Response) -> None:
        self.status_code = response.status_code
        self.status_text = response.reason_phrase
        self.url = str(response.request.url)
        self.body = _response_data(response)
        self.response = response
        super().__init__(
            f"Figma API Error: {self.status_code} {self.status_text} on URL: {self.url}"
        )

    @property
    def upstream_message(self) -> str:
        """The ``message`` (or ``err``) field of the error body, if any."""
        if isinstance(self.body, Mapping):
            message = self.body.get("message") or self.body.get("err")
            if message:
                return str(message)
        return ""


class FigmaRequestError(FigmaError):
    """Raised when the request never produced a response."""


class FigmaTimeoutError(FigmaRequestError):
    """Raised when the request timed out."""


def _response_data(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_object(value: Any) -> bool:
    return value is not None and not isinstance(
        value, (bool, int, float, str, bytes, list, tuple)
    )


def _flatten_response(response: Any) -> dict[str, Any]:
    if isinstance(response, Mapping):
        return {field: response.get(field) for field in _RESPONSE_FIELDS}

    if isinstance(response, httpx.Response):
        return {
            "status": response.status_code,
            "statusText": response.reason_phrase,
            "headers": dict(response.headers),
            "data": _response_data(response),
        }

    return {field: getattr(response, field, None) for field in _RESPONSE_FIELDS}


def _error_record(error: Any) -> dict[str, Any]:
    record: dict[str, Any] = {}

    if isinstance(error, BaseException):
        record["name"] = type(error).__name__
        record["message"] = str(error)
        if error.__traceback__ is not None:
            record["stack"] = "".join(traceback.format_exception(error))
        else:
            record["stack"] = "".join(traceback.format_exception_only(error))

        cause = error.__cause__ or error.__context__
        if cause is not None:
            record["cause"] = _error_record(cause)

    if isinstance(error, Mapping):
        attributes = dict(error)
    else:
        attributes = dict(getattr(error, "__dict__", {}))

    for key, value in attributes.items():
        if key == "response" and _is_object(value):
            record["response"] = _flatten_response(value)
        else:
            record[key] = value

    return record


def serialize_error(error: Any) -> str:
    """
    Serialize any error value to a detailed, pretty-printed JSON string.

    Exceptions do not serialize to anything useful on their own, so their
    name, message, traceback and cause are copied explicitly together with
    every instance attribute. A ``response`` attribute is reduced to its
    status, status text, headers and data.

    Args:
        error: Any raised or returned error value

    Returns:
        JSON text describing the error
    """
    if error is None or isinstance(error, (bool, int, float, str, list, tuple)):
        return json.dumps(error, indent=2, default=str)

    return json.dumps(_error_record(error), indent=2, default=str)


def describe_figma_error(
    error: BaseException,
    file_id: Optional[str] = None,
    node_id: Optional[str] = None,
) -> str:
    """
    Turn a Figma failure into a message an agent can act on.

    Args:
        error: The exception raised while talking to Figma
        file_id: File the request was about
        node_id: Node ID(s) the request was about, comma-joined

    Returns:
        Human-readable classification of the failure
    """
    if isinstance(error, FigmaAPIError):
        status = error.status_code
        message = error.upstream_message

        if status == 400:
            return f"Invalid request: Request parameters are invalid. {message}".rstrip()
        if status == 401:
            return (
                "API key is invalid or expired. "
                "Please check your FIGMA_ACCESS_TOKEN environment variable."
            )
        if status == 403:
            return (
                "Access denied. You don't have permission to access this Figma "
                f"file ({file_id}) or the file is private."
            )
        if status == 404:
            if node_id:
                return f"Node ({node_id}) not found. Please check the node ID."
            return f"File ({file_id}) not found. Please check the file ID."
        if status == 429:
            return "API rate limit reached. Please wait and try again later."
        if status in (500, 502, 503, 504):
            return (
                f"Figma server error ({status}): "
                "Server is not responding or under maintenance."
            )
        return f"Figma API error ({status}): {message or 'Unknown error details'}"

    if isinstance(error, FigmaTimeoutError):
        return (
            "Figma API request timed out. The file might be too large or "
            "there may be network connectivity issues."
        )

    return f"Figma API error: {error}"
