from .client import ApiError, CollegeApiClient

__all__ = ["ApiError", "CollegeApiClient"]
