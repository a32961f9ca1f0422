"""Simulated course catalog adapter.

Implements CourseCatalogPort without any network: a fixed course list
served after an artificial delay, with a configurable chance of a
simulated transport failure on each fetch.
"""

import asyncio
import logging
import random
from dataclasses import replace

from roster.core.errors import TransportError
from roster.core.models import CourseRecord
from roster.core.ports import CourseCatalogPort

logger = logging.getLogger(__name__)

DEFAULT_COURSES: tuple[CourseRecord, ...] = (
    CourseRecord(id=1, name="HTML Basics"),
    CourseRecord(id=2, name="CSS Mastery"),
    CourseRecord(id=3, name="JavaScript Pro"),
    CourseRecord(id=4, name="React In Depth"),
    CourseRecord(id=5, name="Node.js Fundamentals"),
    CourseRecord(id=6, name="Database Design"),
)

_AVATAR_QUERY = "?auto=compress&cs=tinysrgb&w=150&h=150&fit=crop&crop=face"

DEFAULT_AVATARS: tuple[str, ...] = tuple(
    f"https://images.pexels.com/photos/{photo}/pexels-photo-{photo}.jpeg{_AVATAR_QUERY}"
    for photo in ("1462630", "1036623", "1065084", "1043471", "1181690")
)


class SimulatedCourseCatalog(CourseCatalogPort):
    """Serves a fixed catalog with latency and random transport faults."""

    def __init__(
        self,
        delay_ms: int = 600,
        failure_rate: float = 0.1,
        courses: tuple[CourseRecord, ...] = DEFAULT_COURSES,
        avatars: tuple[str, ...] = DEFAULT_AVATARS,
        rng: random.Random | None = None,
    ):
        """Initialize the simulated catalog.

        Args:
            delay_ms: Artificial latency of every fetch.
            failure_rate: Probability in [0, 1] that a fetch fails.
            courses: Catalog contents.
            avatars: Pool of profile image URLs.
            rng: Random source (seed it for deterministic tests).
        """
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be in [0, 1], got {failure_rate}")
        if not avatars:
            raise ValueError("avatars must not be empty")
        self.delay_ms = delay_ms
        self.failure_rate = failure_rate
        self.courses = courses
        self.avatars = avatars
        self.rng = rng or random.Random()

    async def fetch_courses(self) -> list[CourseRecord]:
        """Return a fresh copy of the catalog after the simulated delay.

        Raises:
            TransportError: On a simulated network failure.
        """
        await asyncio.sleep(self.delay_ms / 1000)

        if self.rng.random() < self.failure_rate:
            logger.debug("Simulated course catalog transport failure")
            raise TransportError(
                "Failed to fetch courses: Network error: Unable to fetch courses"
            )

        return [replace(course) for course in self.courses]

    def random_avatar(self) -> str:
        return self.rng.choice(self.avatars)
