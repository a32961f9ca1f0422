"""Pure state transitions for the EntityStore.

reduce(state, action) -> state' has no hidden effects: ids and
timestamps arrive fully formed inside the action payload, so the same
(state, action) pair always yields the same result. Transitions that
change nothing return the input state object itself.
"""

from dataclasses import dataclass, replace
from typing import TypeAlias

from .models import SearchFilterState, StoreState, StudentRecord


@dataclass(frozen=True)
class AddStudent:
    record: StudentRecord


@dataclass(frozen=True)
class UpdateStudent:
    record: StudentRecord


@dataclass(frozen=True)
class DeleteStudent:
    student_id: str


@dataclass(frozen=True)
class SetSearchTerm:
    term: str


@dataclass(frozen=True)
class SetCourseFilter:
    course_id: int | None


@dataclass(frozen=True)
class LoadStudents:
    records: tuple[StudentRecord, ...]


Action: TypeAlias = (
    AddStudent
    | UpdateStudent
    | DeleteStudent
    | SetSearchTerm
    | SetCourseFilter
    | LoadStudents
)


def reduce(state: StoreState, action: Action) -> StoreState:
    """Apply one action to the state.

    Total over its input: an update or delete naming an unknown id is a
    no-op, never an error, and never creates a record.
    """
    if isinstance(action, AddStudent):
        return replace(state, records=state.records + (action.record,))

    if isinstance(action, UpdateStudent):
        incoming = action.record
        if not any(r.id == incoming.id for r in state.records):
            return state
        records = tuple(
            _merge(r, incoming) if r.id == incoming.id else r
            for r in state.records
        )
        return replace(state, records=records)

    if isinstance(action, DeleteStudent):
        remaining = tuple(r for r in state.records if r.id != action.student_id)
        if len(remaining) == len(state.records):
            return state
        return replace(state, records=remaining)

    if isinstance(action, SetSearchTerm):
        if action.term == state.filters.search_term:
            return state
        return replace(
            state, filters=replace(state.filters, search_term=action.term)
        )

    if isinstance(action, SetCourseFilter):
        if action.course_id == state.filters.selected_course_id:
            return state
        return replace(
            state, filters=replace(state.filters, selected_course_id=action.course_id)
        )

    if isinstance(action, LoadStudents):
        return replace(state, records=tuple(action.records))

    raise TypeError(f"Unknown action: {action!r}")


def _merge(stored: StudentRecord, incoming: StudentRecord) -> StudentRecord:
    """Take the incoming fields but keep the stored created_at."""
    return replace(
        incoming,
        created_at=stored.created_at,
        updated_at=max(incoming.updated_at, stored.created_at),
    )


INITIAL_STATE = StoreState(records=(), filters=SearchFilterState())
