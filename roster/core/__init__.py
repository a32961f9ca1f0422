"""Core domain logic for the Roster student data layer.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .errors import (
    RemoteValidationError,
    RosterError,
    StructuralValidationError,
    TransportError,
)
from .models import (
    FIELDS,
    CourseLoadState,
    CourseRecord,
    FieldErrors,
    SearchFilterState,
    StoreState,
    StudentDraft,
    StudentFormData,
    StudentRecord,
    SubmissionResult,
    SubmissionStatus,
    ValidationVerdict,
    VerdictStatus,
)

__all__ = [
    "FIELDS",
    "CourseLoadState",
    "CourseRecord",
    "FieldErrors",
    "RemoteValidationError",
    "RosterError",
    "SearchFilterState",
    "StoreState",
    "StructuralValidationError",
    "StudentDraft",
    "StudentFormData",
    "StudentRecord",
    "SubmissionResult",
    "SubmissionStatus",
    "TransportError",
    "ValidationVerdict",
    "VerdictStatus",
]
