"""Simulated remote validation adapter.

Implements RemoteValidationPort by checking the email against a fixed
denylist of addresses that are "already taken". The check is staged the
way a real round-trip would be: an immediately-resolved step, then a
timer-based network delay. The immediate step is scheduled with
call_soon and always settles before the timer step, even though both
are awaited in sequence; the order is kept in `trace`.
"""

import asyncio
import logging
from collections.abc import Iterable

from roster.core.errors import RemoteValidationError
from roster.core.models import StudentDraft
from roster.core.ports import RemoteValidationPort

logger = logging.getLogger(__name__)

DEFAULT_TAKEN_EMAILS = ("test@example.com", "admin@test.com")

DUPLICATE_EMAIL_MESSAGE = "A student with this email already exists"


class SimulatedRemoteValidator(RemoteValidationPort):
    """Email uniqueness check against a local denylist, with latency."""

    def __init__(
        self,
        delay_ms: int = 300,
        taken_emails: Iterable[str] = DEFAULT_TAKEN_EMAILS,
    ):
        """Initialize the validator.

        Args:
            delay_ms: Simulated network delay of the timer step.
            taken_emails: Addresses treated as already registered.
                Compared case-insensitively.
        """
        self.delay_ms = delay_ms
        self.taken_emails = frozenset(e.lower() for e in taken_emails)
        self.trace: list[str] = []
        self.call_count = 0

    async def check_student(self, draft: StudentDraft) -> None:
        """Reject the draft if its email is already taken.

        Raises:
            RemoteValidationError: If the lower-cased email is denylisted.
        """
        self.call_count += 1
        loop = asyncio.get_running_loop()
        self._step("started")

        immediate: asyncio.Future[None] = loop.create_future()
        loop.call_soon(self._settle, immediate, "immediate")
        await immediate

        await asyncio.sleep(self.delay_ms / 1000)
        self._step("timer")

        if draft.email.lower() in self.taken_emails:
            raise RemoteValidationError(DUPLICATE_EMAIL_MESSAGE)

        self._step("completed")

    def _settle(self, future: "asyncio.Future[None]", step: str) -> None:
        self._step(step)
        if not future.done():
            future.set_result(None)

    def _step(self, step: str) -> None:
        self.trace.append(step)
        logger.debug(f"Remote validation step: {step}")
