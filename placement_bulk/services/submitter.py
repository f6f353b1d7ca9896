from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from ..api.client import ApiError, DEFAULT_ERROR_MESSAGE
from ..models.student import NormalizedStudent
from ..models.upload_result import UploadResult

"""Batch submitter: the last step of a bulk upload.

The full normalized batch goes out in a single request, rows that failed
validation included. When validation errors exist the caller-supplied
``confirm`` callable decides whether to go ahead; the prompt itself is the
caller's business (an interactive question in the CLI, a lambda in tests).
"""

__all__ = [
    "BatchSubmitter",
    "ConfirmCallback",
    "SubmissionError",
    "SubmissionInProgressError",
    "NO_DATA_MESSAGE",
    "confirmation_prompt",
]

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No valid data to upload"

# Receives the number of rows with errors; True means "upload anyway".
ConfirmCallback = Callable[[int], bool]


class BulkUploadApi(Protocol):
    def bulk_add_students(self, students: Sequence[NormalizedStudent]) -> UploadResult: ...


class SubmissionError(Exception):
    """Raised when the batch could not be submitted."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SubmissionInProgressError(SubmissionError):
    """Raised when submit() is called while another submission is pending."""


def confirmation_prompt(error_count: int) -> str:
    return f"There are {error_count} rows with errors. Continue uploading anyway?"


class BatchSubmitter:
    def __init__(self, api: BulkUploadApi, confirm: ConfirmCallback | None = None) -> None:
        self._api = api
        self._confirm = confirm
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def submit(
        self, students: Sequence[NormalizedStudent], error_count: int = 0
    ) -> UploadResult | None:
        """Submit the batch; returns None when the user declines.

        Raises:
            SubmissionInProgressError: a previous submit() has not settled
            SubmissionError: empty batch, or the API call failed
        """
        if self._in_flight:
            raise SubmissionInProgressError("an upload is already in progress")
        if not students:
            raise SubmissionError(NO_DATA_MESSAGE)

        if error_count > 0:
            if self._confirm is None or not self._confirm(error_count):
                logger.info(f"upload cancelled: {error_count} rows with errors")
                return None

        self._in_flight = True
        try:
            result = self._api.bulk_add_students(students)
        except ApiError as e:
            raise SubmissionError(e.message or DEFAULT_ERROR_MESSAGE, e.status_code) from e
        finally:
            self._in_flight = False

        logger.info(result.message or f"Uploaded {result.success_count} students.")
        return result
