"""Stdout presentation adapter.

Renders the projection to the terminal with human-readable formatting:
one card per student, the result count, and per-course enrollment
statistics.
"""

import asyncio
from collections.abc import Sequence

from roster.core.models import CourseRecord, SearchFilterState, StoreState, StudentRecord
from roster.core.projection import (
    course_lookup,
    course_name,
    enrollment_counts,
    project,
    results_summary,
)


class StdoutRosterView:
    """Prints the student list and statistics to stdout."""

    def __init__(self, courses: Sequence[CourseRecord] = (), verbose: bool = False):
        """Initialize stdout view.

        Args:
            courses: Catalog used to resolve course names.
            verbose: If True, include ids and timestamps on each card.
        """
        self.courses = tuple(courses)
        self.verbose = verbose
        self._last_summary: str | None = None

    def set_courses(self, courses: Sequence[CourseRecord]) -> None:
        self.courses = tuple(courses)

    async def show(
        self, students: Sequence[StudentRecord], filters: SearchFilterState
    ) -> None:
        """Print the full dashboard for the given projection."""
        await asyncio.to_thread(print, self.format_dashboard(students, filters))

    def on_state_change(self, state: StoreState) -> None:
        """Store listener: print the result count when it changes."""
        visible = project(state.records, state.filters)
        summary = results_summary(len(visible), state.filters.is_active)
        if summary != self._last_summary:
            self._last_summary = summary
            print(summary)

    def format_dashboard(
        self, students: Sequence[StudentRecord], filters: SearchFilterState
    ) -> str:
        """Format header, cards and statistics as one block of text."""
        sections = [self._format_header(len(students), filters)]
        if students:
            lookup = course_lookup(self.courses)
            sections.extend(self.format_card(s, course_name(lookup, s.course_id)) for s in students)
            sections.append(self._format_statistics(students))
        else:
            sections.append("No students found")
        sections.append("=" * 80)
        return "\n".join(sections)

    def format_card(self, student: StudentRecord, course: str) -> str:
        """Format a single student card."""
        lines = [
            "-" * 80,
            f"{student.name} <{student.email}>",
            f"Course: {course}",
            f"Added: {student.created_at.date().isoformat()}",
        ]
        if self.verbose:
            lines.append(f"ID: {student.id}")
            lines.append(f"Updated: {student.updated_at.isoformat()}")
            if student.profile_image:
                lines.append(f"Image: {student.profile_image}")
        return "\n".join(lines)

    @staticmethod
    def _format_header(count: int, filters: SearchFilterState) -> str:
        lines = [
            "=" * 80,
            "STUDENT MANAGEMENT DASHBOARD",
            "=" * 80,
            results_summary(count, filters.is_active),
        ]
        return "\n".join(lines)

    def _format_statistics(self, students: Sequence[StudentRecord]) -> str:
        lines = ["-" * 80, "COURSE ENROLLMENT STATISTICS"]
        for course, enrolled in enrollment_counts(students, self.courses):
            noun = "student" if enrolled == 1 else "students"
            lines.append(f"  {course.name}: {enrolled} {noun} enrolled")
        return "\n".join(lines)
