"""Port interfaces for the Roster data layer.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - CourseCatalogPort: Fetch the course catalog, pick avatars
   - RemoteValidationPort: Simulated backend uniqueness check

2. **Driving Ports** (adapters/external systems call into core)
   - RosterPort: Everything a presentation layer can ask of a session
"""

from abc import ABC, abstractmethod

from .models import (
    CourseLoadState,
    CourseRecord,
    SearchFilterState,
    StudentDraft,
    StudentFormData,
    StudentRecord,
    SubmissionResult,
)


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class CourseCatalogPort(ABC):
    """Port for the course catalog collaborator.

    Implementations must return fresh copies on every fetch so that
    callers cannot mutate the catalog's own data.
    """

    @abstractmethod
    async def fetch_courses(self) -> list[CourseRecord]:
        """Retrieve the full course catalog.

        Returns:
            List of CourseRecord in catalog order.

        Raises:
            TransportError: If the (simulated) transport fails.
                Caller decides whether to retry; no automatic backoff.
        """

    @abstractmethod
    def random_avatar(self) -> str:
        """Return one of a small fixed set of profile image URLs.

        Synchronous and side-effect free. The URL is never checked for
        reachability.
        """


class RemoteValidationPort(ABC):
    """Port for the remote half of student validation."""

    @abstractmethod
    async def check_student(self, draft: StudentDraft) -> None:
        """Validate a new student against the remote side.

        Args:
            draft: Structurally valid, normalized student data.

        Raises:
            RemoteValidationError: If the remote side rejects the student
                (e.g. the email is already in use).
            Exception: Any transport fault. Callers treat it exactly like
                a rejection.
        """


# ============================================================================
# DRIVING PORTS (Presentation calls into core)
# ============================================================================


class RosterPort(ABC):
    """Port for presentation-initiated actions on a roster session."""

    @abstractmethod
    def visible_students(self) -> tuple[StudentRecord, ...]:
        """Current projection: records matching the search and filter."""

    @abstractmethod
    def get_student(self, student_id: str) -> StudentRecord | None:
        """Look up a single student regardless of the current filter."""

    @abstractmethod
    def filters(self) -> SearchFilterState:
        """Current search/filter criteria."""

    @abstractmethod
    def course_state(self) -> CourseLoadState:
        """Current course catalog load state."""

    @abstractmethod
    async def load_courses(self) -> CourseLoadState:
        """Load (or reload) the course catalog. Never raises."""

    @abstractmethod
    async def retry_courses(self) -> CourseLoadState:
        """Manually re-fetch the catalog after a failure. Never raises."""

    @abstractmethod
    def type_search(self, raw: str) -> None:
        """Feed a raw keystroke update through the search debouncer."""

    @abstractmethod
    def clear_search(self) -> None:
        """Drop any pending search and apply the empty term immediately."""

    @abstractmethod
    def filter_by_course(self, course_id: int | None) -> None:
        """Set or clear the course filter."""

    @abstractmethod
    async def submit(
        self, form: StudentFormData, editing: StudentRecord | None = None
    ) -> SubmissionResult:
        """Validate and, on success, add or update a student.

        Args:
            form: Raw form data.
            editing: The record being edited, or None to create.
        """

    @abstractmethod
    def dismiss_form(self) -> None:
        """Abandon the open form; a verdict still in flight is discarded."""

    @abstractmethod
    def delete_student(self, student_id: str) -> None:
        """Remove a student. Unknown ids are ignored."""

    @abstractmethod
    def random_avatar(self) -> str:
        """Suggest a profile image URL for the form."""
