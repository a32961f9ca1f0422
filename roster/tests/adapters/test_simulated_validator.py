"""Unit tests for SimulatedRemoteValidator."""

import asyncio

import pytest

from roster.adapters.validation.simulated import (
    DUPLICATE_EMAIL_MESSAGE,
    SimulatedRemoteValidator,
)
from roster.core.errors import RemoteValidationError
from roster.core.models import StudentDraft


def draft(email: str) -> StudentDraft:
    return StudentDraft(name="Some One", email=email, course_id=1)


@pytest.mark.asyncio
async def test_fresh_email_passes():
    validator = SimulatedRemoteValidator(delay_ms=0)

    await validator.check_student(draft("new@example.com"))

    assert validator.call_count == 1
    assert validator.trace == ["started", "immediate", "timer", "completed"]


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["test@example.com", "ADMIN@test.com"])
async def test_taken_email_rejected(email):
    validator = SimulatedRemoteValidator(delay_ms=0)

    with pytest.raises(RemoteValidationError) as excinfo:
        await validator.check_student(draft(email))

    assert str(excinfo.value) == DUPLICATE_EMAIL_MESSAGE
    assert validator.trace == ["started", "immediate", "timer"]


@pytest.mark.asyncio
async def test_custom_denylist():
    validator = SimulatedRemoteValidator(delay_ms=0, taken_emails=["Taken@X.com"])

    with pytest.raises(RemoteValidationError):
        await validator.check_student(draft("taken@x.com"))
    await validator.check_student(draft("test@example.com"))


@pytest.mark.asyncio
async def test_immediate_step_settles_before_timer_step():
    """The call_soon step lands while the delay is still running."""
    validator = SimulatedRemoteValidator(delay_ms=50)

    task = asyncio.create_task(validator.check_student(draft("a@b.co")))
    await asyncio.sleep(0.01)

    assert validator.trace == ["started", "immediate"]

    await task
    assert validator.trace[-2:] == ["timer", "completed"]


@pytest.mark.asyncio
async def test_overlapping_checks_interleave():
    validator = SimulatedRemoteValidator(delay_ms=20)

    await asyncio.gather(
        validator.check_student(draft("one@example.com")),
        validator.check_student(draft("two@example.com")),
    )

    assert validator.call_count == 2
    assert validator.trace[:2] == ["started", "started"]
    assert validator.trace.count("completed") == 2
