"""EntityStore: the authoritative in-memory record set.

The store owns the only mutable reference to the state. Every change
goes through reduce(); the helper methods here only build fully formed
actions (fresh ids, timestamps from the injected clock) and dispatch
them. Listeners are notified synchronously after each transition that
actually changed the state.
"""

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from .models import (
    SearchFilterState,
    StoreState,
    StudentDraft,
    StudentRecord,
)
from .projection import project
from .reducer import (
    INITIAL_STATE,
    Action,
    AddStudent,
    DeleteStudent,
    LoadStudents,
    SetCourseFilter,
    SetSearchTerm,
    UpdateStudent,
    reduce,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]
StateListener = Callable[[StoreState], None]

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class EntityStore:
    """Reducer-driven container for student records and filter state.

    Constructed once per session and passed to whoever needs it; there is
    no module-level instance.
    """

    def __init__(
        self,
        initial: StoreState = INITIAL_STATE,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        """Initialize the store.

        Args:
            initial: Starting state (empty by default).
            clock: Returns the current timezone-aware time.
            id_factory: Returns a fresh, globally unique record id.
        """
        self._state = initial
        self._clock = clock
        self._id_factory = id_factory
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def records(self) -> tuple[StudentRecord, ...]:
        return self._state.records

    @property
    def filters(self) -> SearchFilterState:
        return self._state.filters

    def get(self, student_id: str) -> StudentRecord | None:
        """Look up a record by id."""
        for record in self._state.records:
            if record.id == student_id:
                return record
        return None

    def dispatch(self, action: Action) -> StoreState:
        """Run one transition and notify listeners if the state changed."""
        previous = self._state
        self._state = reduce(previous, action)
        logger.debug(
            f"Dispatched {type(action).__name__}",
            extra={
                "action": type(action).__name__,
                "changed": self._state is not previous,
                "record_count": len(self._state.records),
            },
        )
        if self._state is not previous:
            for listener in list(self._listeners):
                listener(self._state)
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Record transitions
    # ------------------------------------------------------------------

    def add_record(self, draft: StudentDraft) -> StudentRecord:
        """Create a record from a validated draft and append it.

        Returns:
            The stored record, with its new id and timestamps.
        """
        now = self._clock()
        record = StudentRecord(
            id=self._id_factory(),
            name=draft.name,
            email=draft.email,
            course_id=draft.course_id,
            profile_image=draft.profile_image,
            created_at=now,
            updated_at=now,
        )
        self.dispatch(AddStudent(record))
        return record

    def add(self, draft: StudentDraft) -> StoreState:
        """Add transition. Never fails; validation is the caller's job."""
        self.add_record(draft)
        return self._state

    def update(self, record: StudentRecord) -> StoreState:
        """Replace the record with the same id and refresh updated_at.

        Unknown ids are a silent no-op. updated_at always moves strictly
        forward, even when the clock has not advanced since the last
        write.
        """
        current = self.get(record.id)
        if current is None:
            logger.debug(
                f"Ignoring update for unknown student {record.id}",
                extra={"student_id": record.id},
            )
            return self._state

        updated_at = max(self._clock(), current.updated_at + _TICK)
        return self.dispatch(
            UpdateStudent(
                replace(record, created_at=current.created_at, updated_at=updated_at)
            )
        )

    def delete(self, student_id: str) -> StoreState:
        """Remove the record if present; unknown ids are a no-op."""
        return self.dispatch(DeleteStudent(student_id))

    def load(self, records: Iterable[StudentRecord]) -> StoreState:
        """Replace the whole record set."""
        return self.dispatch(LoadStudents(tuple(records)))

    # ------------------------------------------------------------------
    # Filter transitions
    # ------------------------------------------------------------------

    def set_search_term(self, term: str) -> StoreState:
        return self.dispatch(SetSearchTerm(term))

    def set_course_filter(self, course_id: int | None) -> StoreState:
        return self.dispatch(SetCourseFilter(course_id))

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    def project(self) -> tuple[StudentRecord, ...]:
        """Records matching the current search and course filter."""
        return project(self._state.records, self._state.filters)
