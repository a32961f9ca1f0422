"""Derived views over the record set.

The projection is what presentation shows: records matching both the
search predicate and the course predicate, in insertion order. The
remaining helpers turn a projection into the summaries the dashboard
displays next to it.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from .models import CourseRecord, SearchFilterState, StudentRecord

UNKNOWN_COURSE = "Unknown Course"


def matches_search(record: StudentRecord, term: str) -> bool:
    """Case-insensitive substring match on name or email.

    The term is trimmed; stored fields are compared as they are.
    An empty term matches everything.
    """
    needle = term.strip().lower()
    if not needle:
        return True
    return needle in record.name.lower() or needle in record.email.lower()


def matches_course(record: StudentRecord, course_id: int | None) -> bool:
    """True if no course is selected or the record is enrolled in it."""
    return course_id is None or record.course_id == course_id


def project(
    records: Iterable[StudentRecord], filters: SearchFilterState
) -> tuple[StudentRecord, ...]:
    """Filter records by search term AND course, preserving order."""
    return tuple(
        r
        for r in records
        if matches_search(r, filters.search_term)
        and matches_course(r, filters.selected_course_id)
    )


def course_lookup(courses: Iterable[CourseRecord]) -> Mapping[int, CourseRecord]:
    """Read-only id -> course map."""
    return MappingProxyType({c.id: c for c in courses})


def course_name(lookup: Mapping[int, CourseRecord], course_id: int) -> str:
    """Course name, or "Unknown Course" when the catalog lacks the id.

    A miss is expected (records may outlive catalog entries) and is not
    treated as corruption.
    """
    course = lookup.get(course_id)
    return course.name if course is not None else UNKNOWN_COURSE


def enrollment_counts(
    records: Sequence[StudentRecord], courses: Sequence[CourseRecord]
) -> list[tuple[CourseRecord, int]]:
    """Number of given records enrolled in each course, in catalog order."""
    counts: dict[int, int] = {}
    for r in records:
        counts[r.course_id] = counts.get(r.course_id, 0) + 1
    return [(c, counts.get(c.id, 0)) for c in courses]


def results_summary(count: int, filters_active: bool) -> str:
    """Human-readable result count, e.g. "Showing 2 students"."""
    noun = "student" if count == 1 else "students"
    summary = f"Showing {count} {noun}"
    if filters_active:
        summary += " matching your criteria"
    return summary
