"""Domain models for the Roster student data layer.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, TypeAlias


@dataclass(frozen=True)
class CourseRecord:
    """A course from the catalog. Immutable, owned by the catalog."""

    id: int
    name: str


@dataclass(frozen=True)
class StudentDraft:
    """A student record without identity or timestamps.

    The payload for the Add transition. Callers validate it before
    handing it to the store.
    """

    name: str
    email: str
    course_id: int
    profile_image: str | None = None


@dataclass(frozen=True)
class StudentRecord:
    """A student entity owned by the EntityStore.

    Frozen: consumers only ever receive read-only snapshots. New versions
    are produced by the store's transitions via dataclasses.replace.
    """

    id: str  # UUID hex, assigned once at creation
    name: str
    email: str
    course_id: int  # weak reference to CourseRecord.id
    created_at: datetime
    updated_at: datetime
    profile_image: str | None = None

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at ({self.updated_at}) cannot be before "
                f"created_at ({self.created_at})"
            )

    def to_draft(self) -> StudentDraft:
        """Strip identity and timestamps."""
        return StudentDraft(
            name=self.name,
            email=self.email,
            course_id=self.course_id,
            profile_image=self.profile_image,
        )


@dataclass(frozen=True)
class SearchFilterState:
    """Current search and course filter criteria."""

    search_term: str = ""
    selected_course_id: int | None = None

    @property
    def is_active(self) -> bool:
        """True when either criterion narrows the projection."""
        return bool(self.search_term.strip()) or self.selected_course_id is not None


@dataclass(frozen=True)
class StoreState:
    """Complete state of the EntityStore.

    Records are kept in insertion order.
    """

    records: tuple[StudentRecord, ...] = ()
    filters: SearchFilterState = field(default_factory=SearchFilterState)


# ============================================================================
# Form input and validation outcomes
# ============================================================================


FieldName: TypeAlias = Literal["name", "email", "course_id"]

FIELDS: tuple[FieldName, ...] = ("name", "email", "course_id")


@dataclass(frozen=True)
class StudentFormData:
    """Raw form input as typed by the user.

    course_id is the raw selection string; "" and "0" mean unset.
    """

    name: str = ""
    email: str = ""
    course_id: str = ""
    profile_image: str = ""

    @classmethod
    def from_record(cls, record: StudentRecord) -> "StudentFormData":
        """Pre-fill a form for editing an existing record."""
        return cls(
            name=record.name,
            email=record.email,
            course_id=str(record.course_id),
            profile_image=record.profile_image or "",
        )


@dataclass(frozen=True)
class FieldErrors:
    """Structural validation errors, one optional message per field."""

    name: str | None = None
    email: str | None = None
    course_id: str | None = None

    def __bool__(self) -> bool:
        return any(getattr(self, f) is not None for f in FIELDS)

    def items(self) -> list[tuple[FieldName, str]]:
        """(field, message) pairs for the fields that failed."""
        return [
            (f, message)
            for f in FIELDS
            if (message := getattr(self, f)) is not None
        ]

    def cleared(self, field_name: FieldName) -> "FieldErrors":
        """Copy with the given field's error removed.

        Used when the user starts editing a field that had an error.
        """
        return FieldErrors(
            **{f: None if f == field_name else getattr(self, f) for f in FIELDS}
        )


class VerdictStatus(Enum):
    """Outcome of a validation pipeline run."""

    PASSED = "passed"
    FIELD_ERRORS = "field_errors"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of running both validation phases.

    field_errors is populated only for FIELD_ERRORS; message only for
    REJECTED. draft is the normalized payload when PASSED.
    """

    status: VerdictStatus
    draft: StudentDraft | None = None
    field_errors: FieldErrors = field(default_factory=FieldErrors)
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASSED


# ============================================================================
# Orchestration results
# ============================================================================


class SubmissionStatus(Enum):
    """Outcome of a form submission.

    - COMMITTED: validated and applied to the store
    - FIELD_ERRORS: structural phase failed, nothing sent remotely
    - REJECTED: remote phase (or transport) failed, store untouched
    - BUSY: another submission is still in flight
    - DISCARDED: verdict arrived after the form was dismissed
    """

    COMMITTED = "committed"
    FIELD_ERRORS = "field_errors"
    REJECTED = "rejected"
    BUSY = "busy"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class SubmissionResult:
    """What happened to a submission."""

    status: SubmissionStatus
    record: StudentRecord | None = None
    field_errors: FieldErrors = field(default_factory=FieldErrors)
    message: str | None = None


@dataclass(frozen=True)
class CourseLoadState:
    """Observable state of the course catalog load."""

    courses: tuple[CourseRecord, ...] | None = None
    loading: bool = False
    error: str | None = None

    @property
    def ready(self) -> bool:
        return self.courses is not None and not self.loading
