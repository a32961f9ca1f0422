"""CLI command implementations for roster management.

Provides human-initiated actions through a command-line interface.

This adapter maps CLI commands (list, add, edit, delete, search, filter,
courses, stats) to RosterPort operations. It handles CLI-specific
formatting and error reporting; every command returns a JSON-friendly
dictionary with a "status" of "success" or "error".
"""

import logging
from dataclasses import replace
from typing import Any

from roster.adapters.presentation.stdout import StdoutRosterView
from roster.core.models import (
    StudentFormData,
    StudentRecord,
    SubmissionResult,
    SubmissionStatus,
)
from roster.core.ports import RosterPort
from roster.core.projection import enrollment_counts, results_summary

logger = logging.getLogger(__name__)


def _student_to_dict(student: StudentRecord) -> dict[str, Any]:
    return {
        "id": student.id,
        "name": student.name,
        "email": student.email,
        "course_id": student.course_id,
        "profile_image": student.profile_image,
        "created_at": student.created_at.isoformat(),
        "updated_at": student.updated_at.isoformat(),
    }


def _form_value(value: Any) -> str:
    """Raw form text for a CLI argument; a JSON null means an empty field."""
    return "" if value is None else str(value)


class CLICommandHandler:
    """Handles CLI commands by delegating to RosterPort."""

    def __init__(self, roster: RosterPort, view: StdoutRosterView | None = None):
        """Initialize the CLI command handler.

        Args:
            roster: RosterPort implementation to execute commands.
            view: Formatter for text output. Defaults to a plain view.
        """
        self.roster = roster
        self.view = view or StdoutRosterView()

    async def list_students(self, output_format: str = "json") -> dict[str, Any]:
        """List the students visible under the current search and filter.

        Args:
            output_format: Output format ('json', 'text'). Default 'json'.
        """
        students = self.roster.visible_students()
        filters = self.roster.filters()

        if output_format == "json":
            return {
                "status": "success",
                "operation": "list",
                "summary": results_summary(len(students), filters.is_active),
                "search_term": filters.search_term,
                "course_id": filters.selected_course_id,
                "data": [_student_to_dict(s) for s in students],
            }

        elif output_format == "text":
            return {
                "status": "success",
                "operation": "list",
                "data": self.view.format_dashboard(students, filters),
            }

        else:
            return {
                "status": "error",
                "operation": "list",
                "message": f"Unsupported format: {output_format}",
            }

    async def add_student(
        self,
        name: str | None = "",
        email: str | None = "",
        course_id: str | int | None = "",
        profile_image: str | None = "",
    ) -> dict[str, Any]:
        """Validate and add a new student."""
        form = StudentFormData(
            name=_form_value(name),
            email=_form_value(email),
            course_id=_form_value(course_id),
            profile_image=_form_value(profile_image),
        )
        result = await self.roster.submit(form)
        return self._submission_to_dict("add", result)

    async def edit_student(self, student_id: str, **changes: Any) -> dict[str, Any]:
        """Edit an existing student; unspecified fields keep their values.

        Args:
            student_id: Id of the student to edit.
            **changes: Any of name, email, course_id, profile_image.
                A null value clears the field; a cleared profile image
                is replaced by a random avatar on commit.
        """
        existing = self.roster.get_student(student_id)
        if existing is None:
            logger.error(f"Failed to edit student: {student_id} not found")
            return {
                "status": "error",
                "operation": "edit",
                "student_id": student_id,
                "message": f"Student {student_id} not found",
            }

        unknown = set(changes) - {"name", "email", "course_id", "profile_image"}
        if unknown:
            return {
                "status": "error",
                "operation": "edit",
                "student_id": student_id,
                "message": f"Unknown fields: {', '.join(sorted(unknown))}",
            }

        form = replace(
            StudentFormData.from_record(existing),
            **{key: _form_value(value) for key, value in changes.items()},
        )
        result = await self.roster.submit(form, editing=existing)
        return self._submission_to_dict("edit", result)

    async def delete_student(self, student_id: str) -> dict[str, Any]:
        """Delete a student. Deleting an unknown id succeeds as a no-op."""
        existed = self.roster.get_student(student_id) is not None
        self.roster.delete_student(student_id)
        return {
            "status": "success",
            "operation": "delete",
            "student_id": student_id,
            "message": (
                f"Student {student_id} deleted"
                if existed
                else f"Student {student_id} not found, nothing deleted"
            ),
        }

    async def search(self, term: str) -> dict[str, Any]:
        """Feed a search term through the debouncer."""
        self.roster.type_search(term)
        return {
            "status": "success",
            "operation": "search",
            "search_term": term,
            "message": "Search scheduled",
        }

    async def clear_search(self) -> dict[str, Any]:
        self.roster.clear_search()
        return {
            "status": "success",
            "operation": "clear",
            "message": "Search cleared",
        }

    async def filter_course(self, course_id: int | str | None = None) -> dict[str, Any]:
        """Set the course filter; None or "" clears it."""
        if course_id in (None, ""):
            selected = None
        else:
            try:
                selected = int(course_id)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                return {
                    "status": "error",
                    "operation": "filter",
                    "message": f"Invalid course id: {course_id!r}",
                }
        self.roster.filter_by_course(selected)
        return {
            "status": "success",
            "operation": "filter",
            "course_id": selected,
        }

    async def list_courses(self) -> dict[str, Any]:
        """Show the loaded course catalog, or the load error."""
        state = self.roster.course_state()
        if state.courses is None:
            return {
                "status": "error",
                "operation": "courses",
                "message": state.error or "Courses not loaded",
            }
        return {
            "status": "success",
            "operation": "courses",
            "data": [{"id": c.id, "name": c.name} for c in state.courses],
        }

    async def retry_courses(self) -> dict[str, Any]:
        """Manually re-fetch the course catalog."""
        state = await self.roster.retry_courses()
        if state.courses is not None:
            self.view.set_courses(state.courses)
        return await self.list_courses()

    async def stats(self) -> dict[str, Any]:
        """Per-course enrollment counts over the visible students."""
        state = self.roster.course_state()
        courses = state.courses or ()
        counts = enrollment_counts(self.roster.visible_students(), courses)
        return {
            "status": "success",
            "operation": "stats",
            "data": [
                {"course_id": c.id, "course": c.name, "enrolled": n}
                for c, n in counts
            ],
        }

    async def avatar(self) -> dict[str, Any]:
        return {
            "status": "success",
            "operation": "avatar",
            "profile_image": self.roster.random_avatar(),
        }

    @staticmethod
    def _submission_to_dict(operation: str, result: SubmissionResult) -> dict[str, Any]:
        if result.status == SubmissionStatus.COMMITTED:
            assert result.record is not None
            return {
                "status": "success",
                "operation": operation,
                "data": _student_to_dict(result.record),
            }

        output: dict[str, Any] = {
            "status": "error",
            "operation": operation,
            "reason": result.status.value,
        }
        if result.status == SubmissionStatus.FIELD_ERRORS:
            output["field_errors"] = dict(result.field_errors.items())
            output["message"] = "Please correct the highlighted fields"
        else:
            output["message"] = result.message or "Submission was not applied"
        logger.error(f"Failed to {operation} student: {output['message']}")
        return output


async def run_command(
    handler: CLICommandHandler,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        handler: CLICommandHandler bound to a session.
        command: Command name.
        args: Dictionary of command arguments.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required
            argument is missing.
    """
    if command == "list":
        return await handler.list_students(args.get("format", "json"))

    elif command == "add":
        return await handler.add_student(
            name=args.get("name", ""),
            email=args.get("email", ""),
            course_id=args.get("course_id", ""),
            profile_image=args.get("profile_image", ""),
        )

    elif command == "edit":
        if "student_id" not in args:
            raise ValueError("Missing required parameter: student_id")
        changes = {k: v for k, v in args.items() if k != "student_id"}
        return await handler.edit_student(args["student_id"], **changes)

    elif command == "delete":
        if "student_id" not in args:
            raise ValueError("Missing required parameter: student_id")
        return await handler.delete_student(args["student_id"])

    elif command == "search":
        return await handler.search(str(args.get("term", "")))

    elif command == "clear":
        return await handler.clear_search()

    elif command == "filter":
        return await handler.filter_course(args.get("course_id"))

    elif command == "courses":
        return await handler.list_courses()

    elif command == "retry":
        return await handler.retry_courses()

    elif command == "stats":
        return await handler.stats()

    elif command == "avatar":
        return await handler.avatar()

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
