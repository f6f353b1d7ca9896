from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..models.student import NormalizedStudent
from ..models.upload_result import UploadResult

"""Thin wrapper around the college API used by the bulk upload.

Only the ``POST /college/students/bulk`` call is needed here. Authentication
is a bearer token read from config; obtaining it is outside this tool.
"""

__all__ = [
    "ApiError",
    "CollegeApiClient",
    "BULK_STUDENTS_PATH",
    "DEFAULT_ERROR_MESSAGE",
]

logger = logging.getLogger(__name__)

BULK_STUDENTS_PATH = "/college/students/bulk"
DEFAULT_ERROR_MESSAGE = "Upload failed"

# status class -> hint logged next to the server message
_STATUS_HINTS = {
    401: "Session expired. Please login again.",
    403: "Access denied",
}
_SERVER_ERROR_HINT = "Server error. Please try again later."


class ApiError(Exception):
    """Raised for transport failures and non-2xx answers.

    ``message`` is the server supplied message when the body carries one,
    otherwise the generic fallback.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class CollegeApiClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> CollegeApiClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def bulk_add_students(self, students: Sequence[NormalizedStudent]) -> UploadResult:
        """Send the whole batch in one request and return the server breakdown."""
        payload = {"students": [s.to_payload() for s in students]}
        logger.debug(f"POST {BULK_STUDENTS_PATH} students={len(students)}")
        try:
            response = self._client.post(BULK_STUDENTS_PATH, json=payload)
        except httpx.HTTPError as e:
            raise ApiError(f"{DEFAULT_ERROR_MESSAGE}: {e}") from e

        if response.is_error:
            status = response.status_code
            hint = _STATUS_HINTS.get(status) or (_SERVER_ERROR_HINT if status >= 500 else None)
            if hint:
                logger.warning(f"api: {hint} (HTTP {status})")
            raise ApiError(_server_message(response) or DEFAULT_ERROR_MESSAGE, status_code=status)

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(f"{DEFAULT_ERROR_MESSAGE}: invalid JSON response", response.status_code) from e
        if not isinstance(body, dict):
            raise ApiError(f"{DEFAULT_ERROR_MESSAGE}: unexpected response body", response.status_code)
        return UploadResult.from_response(body)
