"""Fake CourseCatalogPort implementation for testing."""

from roster.core.errors import TransportError
from roster.core.models import CourseRecord
from roster.core.ports import CourseCatalogPort

FAKE_AVATAR = "https://example.com/avatar.png"


class FakeCourseCatalog(CourseCatalogPort):
    """In-memory course catalog for testing.

    Returns its courses immediately and tracks calls for assertions.
    """

    def __init__(self, courses: list[CourseRecord] | None = None):
        """Initialize with a small default catalog."""
        self.courses: list[CourseRecord] = (
            courses
            if courses is not None
            else [CourseRecord(id=1, name="HTML Basics"), CourseRecord(id=2, name="CSS Mastery")]
        )
        self.fetch_call_count = 0
        self.avatar_call_count = 0
        self.should_fail: bool = False
        self.fail_message: str = "Failed to fetch courses: Network error"
        self.fail_with: Exception | None = None

    async def fetch_courses(self) -> list[CourseRecord]:
        """Return the configured courses, or fail if told to."""
        self.fetch_call_count += 1

        if self.fail_with is not None:
            raise self.fail_with
        if self.should_fail:
            raise TransportError(self.fail_message)

        return list(self.courses)

    def random_avatar(self) -> str:
        self.avatar_call_count += 1
        return FAKE_AVATAR

    def set_should_fail(self, should_fail: bool, message: str | None = None) -> None:
        """Configure the catalog to fail on subsequent fetches."""
        self.should_fail = should_fail
        if message is not None:
            self.fail_message = message

    def reset(self) -> None:
        """Reset call tracking and failure configuration."""
        self.fetch_call_count = 0
        self.avatar_call_count = 0
        self.should_fail = False
        self.fail_with = None
