"""Models package for data structures used in the application."""

from epic_cloner.models.clone_error import EpicCloneError
from epic_cloner.models.clone_results import (
    REQUIRED_REQUEST_FIELDS,
    CloneEpicRequest,
    CloneResult,
    ErrorResponse,
)

__all__ = [
    "REQUIRED_REQUEST_FIELDS",
    "CloneEpicRequest",
    "CloneResult",
    "EpicCloneError",
    "ErrorResponse",
]
