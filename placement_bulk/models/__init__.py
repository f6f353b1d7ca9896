"""Domain models for the student bulk upload tool."""

from .config_models import ApiConfig, UploadConfig
from .parsed_upload import ParsedUpload
from .student import Backlogs, Education, NormalizedStudent, Score, StudentName
from .upload_result import FailedEntry, UploadResult
from .validation import RowValidationError, ValidationOptions

__all__ = [
    # Configuration models
    "ApiConfig",
    "UploadConfig",
    # Student record
    "Backlogs",
    "Education",
    "NormalizedStudent",
    "Score",
    "StudentName",
    # Processing models
    "ParsedUpload",
    "RowValidationError",
    "ValidationOptions",
    # Submission
    "FailedEntry",
    "UploadResult",
]
