"""Course catalog loading with manual retry.

The loader never retries on its own: a transport failure is recorded in
CourseLoadState.error and the caller decides whether to call retry().
"""

import logging

from .errors import RosterError
from .models import CourseLoadState
from .ports import CourseCatalogPort

logger = logging.getLogger(__name__)


class CourseLoader:
    """Tracks loading/error/data state for the course catalog."""

    def __init__(self, catalog: CourseCatalogPort):
        self.catalog = catalog
        self.state = CourseLoadState(courses=None, loading=False, error=None)
        self.attempts = 0

    async def load(self) -> CourseLoadState:
        """Fetch the catalog once.

        A failure clears any previously loaded courses: the state always
        reflects the latest attempt only.

        Returns:
            The resulting state. Never raises for fetch failures.
        """
        self.attempts += 1
        self.state = CourseLoadState(courses=self.state.courses, loading=True, error=None)

        try:
            courses = await self.catalog.fetch_courses()
        except RosterError as e:
            logger.warning(
                f"Course catalog load failed: {e}",
                extra={"attempt": self.attempts},
            )
            self.state = CourseLoadState(courses=None, loading=False, error=str(e))
            return self.state
        except Exception as e:
            logger.error(f"Unexpected course catalog failure: {e}", exc_info=True)
            self.state = CourseLoadState(
                courses=None, loading=False, error="Failed to load courses"
            )
            return self.state

        self.state = CourseLoadState(courses=tuple(courses), loading=False, error=None)
        logger.info(
            f"Loaded {len(courses)} courses",
            extra={"attempt": self.attempts, "course_count": len(courses)},
        )
        return self.state

    async def retry(self) -> CourseLoadState:
        """Manual re-invoke after a failure."""
        logger.info("Retrying course catalog load")
        return await self.load()
