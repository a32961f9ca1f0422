"""Roster session: the orchestrator behind a dashboard.

Implements RosterPort by composing the EntityStore, the search
debouncer, the course loader and the submission workflow. A session is
constructed once, used, and closed; close() releases the debounce timer
so nothing is emitted into a torn-down consumer.
"""

import logging

from .courses import CourseLoader
from .models import (
    CourseLoadState,
    SearchFilterState,
    StudentFormData,
    StudentRecord,
    SubmissionResult,
)
from .ports import CourseCatalogPort, RemoteValidationPort, RosterPort
from .search import SearchController
from .store import EntityStore
from .submission import SubmissionWorkflow
from .validation import ValidationPipeline

logger = logging.getLogger(__name__)


class RosterSession(RosterPort):
    """Core implementation of RosterPort."""

    def __init__(
        self,
        store: EntityStore,
        catalog: CourseCatalogPort,
        remote_validator: RemoteValidationPort,
        search_debounce_ms: int = 300,
    ):
        """Initialize the session.

        Args:
            store: EntityStore owned by this session.
            catalog: CourseCatalogPort for courses and avatars.
            remote_validator: RemoteValidationPort for the create check.
            search_debounce_ms: Quiet period before a search term applies.
        """
        self.store = store
        self.catalog = catalog
        self.courses = CourseLoader(catalog)
        self.search = SearchController(store, delay_ms=search_debounce_ms)
        self.submissions = SubmissionWorkflow(
            store=store,
            pipeline=ValidationPipeline(remote_validator),
            catalog=catalog,
        )
        self._closed = False

    def visible_students(self) -> tuple[StudentRecord, ...]:
        return self.store.project()

    def get_student(self, student_id: str) -> StudentRecord | None:
        return self.store.get(student_id)

    def filters(self) -> SearchFilterState:
        return self.store.filters

    def course_state(self) -> CourseLoadState:
        return self.courses.state

    async def load_courses(self) -> CourseLoadState:
        return await self.courses.load()

    async def retry_courses(self) -> CourseLoadState:
        return await self.courses.retry()

    def type_search(self, raw: str) -> None:
        self.search.on_input(raw)

    def clear_search(self) -> None:
        self.search.clear()

    def filter_by_course(self, course_id: int | None) -> None:
        self.store.set_course_filter(course_id)

    async def submit(
        self, form: StudentFormData, editing: StudentRecord | None = None
    ) -> SubmissionResult:
        return await self.submissions.submit(form, editing)

    def dismiss_form(self) -> None:
        self.submissions.dismiss()

    def delete_student(self, student_id: str) -> None:
        before = self.store.state
        if self.store.delete(student_id) is not before:
            logger.info(f"Student {student_id} deleted", extra={"student_id": student_id})

    def random_avatar(self) -> str:
        return self.catalog.random_avatar()

    def close(self) -> None:
        """End the session: drop pending search input and stale forms."""
        if self._closed:
            return
        self.search.close()
        self.submissions.dismiss()
        self._closed = True
        logger.debug("Roster session closed")

    async def __aenter__(self) -> "RosterSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
