"""Unit tests for fake adapter implementations.

These tests verify that fake adapters work correctly as test doubles
and can be used confidently in tests of core domain logic.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from roster.core.errors import RemoteValidationError, TransportError
from roster.core.models import StudentDraft
from roster.tests.fakes import FakeClock, FakeCourseCatalog, FakeRemoteValidator
from roster.tests.fakes.catalog import FAKE_AVATAR


# ============================================================================
# FakeCourseCatalog Tests
# ============================================================================


@pytest.mark.asyncio
async def test_catalog_tracks_calls():
    catalog = FakeCourseCatalog()

    courses = await catalog.fetch_courses()
    avatar = catalog.random_avatar()

    assert len(courses) == 2
    assert avatar == FAKE_AVATAR
    assert catalog.fetch_call_count == 1
    assert catalog.avatar_call_count == 1


@pytest.mark.asyncio
async def test_catalog_failure_and_reset():
    catalog = FakeCourseCatalog()
    catalog.set_should_fail(True, "down")

    with pytest.raises(TransportError, match="down"):
        await catalog.fetch_courses()

    catalog.reset()
    assert catalog.fetch_call_count == 0
    assert await catalog.fetch_courses()


# ============================================================================
# FakeRemoteValidator Tests
# ============================================================================


@pytest.mark.asyncio
async def test_validator_denylist():
    validator = FakeRemoteValidator(taken_emails=("Dup@X.com",))

    with pytest.raises(RemoteValidationError):
        await validator.check_student(StudentDraft(name="D", email="dup@x.com", course_id=1))
    await validator.check_student(StudentDraft(name="E", email="e@x.com", course_id=1))

    assert validator.call_count == 2
    assert [d.email for d in validator.checked] == ["dup@x.com", "e@x.com"]


@pytest.mark.asyncio
async def test_validator_hold_blocks_until_release():
    validator = FakeRemoteValidator()
    validator.hold()

    task = asyncio.create_task(
        validator.check_student(StudentDraft(name="Ann", email="a@x.com", course_id=1))
    )
    await asyncio.sleep(0.01)
    assert not task.done()

    validator.release()
    await task
    assert task.done()


# ============================================================================
# FakeClock Tests
# ============================================================================


def test_clock_advances_only_when_told():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    clock = FakeClock(start)

    assert clock() == start
    assert clock() == start
    assert clock.advance(seconds=30) == start + timedelta(seconds=30)
    assert clock() == start + timedelta(seconds=30)
