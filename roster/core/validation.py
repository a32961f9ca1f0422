"""Two-phase validation of student form input.

Phase 1 is synchronous and local: shape checks on the raw form. Phase 2
asks the RemoteValidationPort whether a new student is acceptable and
only runs for creation, never for edits. Both phases must pass before a
caller may mutate the store; the pipeline itself never touches it.
"""

import logging
import re

from .errors import RemoteValidationError, StructuralValidationError
from .models import (
    FieldErrors,
    StudentDraft,
    StudentFormData,
    ValidationVerdict,
    VerdictStatus,
)
from .ports import RemoteValidationPort

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

UNSET_COURSE_VALUES = frozenset({"", "0"})


def parse_course_id(raw: str) -> int | None:
    """Positive integer course id from the raw selection, or None if unset.

    "", "0", zero in any spelling, negatives and non-integers all mean
    no course was selected.
    """
    raw = raw.strip()
    if raw in UNSET_COURSE_VALUES:
        return None
    try:
        course_id = int(raw)
    except ValueError:
        return None
    return course_id if course_id > 0 else None


def is_valid_email(email: str) -> bool:
    """Simple local@domain.tld shape check on the trimmed value."""
    return EMAIL_PATTERN.match(email.strip()) is not None


def validate_structure(form: StudentFormData) -> FieldErrors:
    """Run the structural checks and collect one message per bad field.

    Returns:
        FieldErrors; falsy when every field passed.
    """
    name = form.name.strip()
    if not name:
        name_error = "Name is required"
    elif len(name) < NAME_MIN_LENGTH:
        name_error = f"Name must be at least {NAME_MIN_LENGTH} characters"
    elif len(name) > NAME_MAX_LENGTH:
        name_error = f"Name must be less than {NAME_MAX_LENGTH} characters"
    else:
        name_error = None

    if not form.email.strip():
        email_error = "Email is required"
    elif not is_valid_email(form.email):
        email_error = "Please enter a valid email address"
    else:
        email_error = None

    course_error = None
    if parse_course_id(form.course_id) is None:
        course_error = "Please select a course"

    return FieldErrors(name=name_error, email=email_error, course_id=course_error)


def to_draft(form: StudentFormData) -> StudentDraft:
    """Normalize a structurally valid form into a draft.

    Name and email are trimmed; a blank profile image becomes None.

    Raises:
        StructuralValidationError: If the form fails phase 1.
    """
    errors = validate_structure(form)
    course_id = parse_course_id(form.course_id)
    if errors or course_id is None:
        raise StructuralValidationError(errors)
    return StudentDraft(
        name=form.name.strip(),
        email=form.email.strip(),
        course_id=course_id,
        profile_image=form.profile_image.strip() or None,
    )


class ValidationPipeline:
    """Runs the structural phase, then (on create) the remote phase.

    Every failure comes back as a typed ValidationVerdict; nothing raised
    by the remote port escapes. Overlapping runs are neither serialized
    nor cancelled here: that discipline belongs to the calling workflow.
    """

    def __init__(self, remote: RemoteValidationPort):
        """Initialize the pipeline.

        Args:
            remote: RemoteValidationPort implementation for phase 2.
        """
        self.remote = remote

    async def run(self, form: StudentFormData, creating: bool) -> ValidationVerdict:
        """Validate a form submission.

        Args:
            form: Raw form data.
            creating: True for a new student (runs phase 2), False for
                an edit (phase 1 only).

        Returns:
            PASSED with the normalized draft, FIELD_ERRORS (phase 2 not
            attempted), or REJECTED with a single terminal message.
        """
        try:
            draft = to_draft(form)
        except StructuralValidationError as e:
            logger.debug(
                "Structural validation failed",
                extra={"fields": [name for name, _ in e.field_errors.items()]},
            )
            return ValidationVerdict(
                status=VerdictStatus.FIELD_ERRORS, field_errors=e.field_errors
            )

        if not creating:
            return ValidationVerdict(status=VerdictStatus.PASSED, draft=draft)

        try:
            await self.remote.check_student(draft)
        except RemoteValidationError as e:
            logger.warning(f"Remote validation rejected student: {e}")
            return ValidationVerdict(status=VerdictStatus.REJECTED, message=str(e))
        except Exception as e:
            logger.error(f"Remote validation failed unexpectedly: {e}", exc_info=True)
            return ValidationVerdict(
                status=VerdictStatus.REJECTED,
                message=str(e) or "An unexpected error occurred",
            )

        return ValidationVerdict(status=VerdictStatus.PASSED, draft=draft)
