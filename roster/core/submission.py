"""Submission workflow: form -> validation -> store.

This is the caller-side discipline the ValidationPipeline relies on:

- only one submission is in flight at a time (a second one gets BUSY);
- the remote phase runs only when creating;
- a verdict that arrives after dismiss() is DISCARDED, not applied,
  because the remote phase itself cannot be cancelled.

Two independent workflows validating the same email concurrently can
both pass; no atomic re-check against the store is made.
"""

import logging
from dataclasses import replace

from .models import (
    StudentFormData,
    StudentRecord,
    SubmissionResult,
    SubmissionStatus,
    VerdictStatus,
)
from .ports import CourseCatalogPort
from .store import EntityStore
from .validation import ValidationPipeline

logger = logging.getLogger(__name__)


class SubmissionWorkflow:
    """Validates form submissions and commits them to the store."""

    def __init__(
        self,
        store: EntityStore,
        pipeline: ValidationPipeline,
        catalog: CourseCatalogPort,
    ):
        """Initialize the workflow.

        Args:
            store: EntityStore that receives committed records.
            pipeline: ValidationPipeline for both phases.
            catalog: Supplies a random avatar when the form has none.
        """
        self.store = store
        self.pipeline = pipeline
        self.catalog = catalog
        self.in_flight = False
        self._generation = 0

    def dismiss(self) -> None:
        """Abandon the current form; any late verdict will be discarded."""
        self._generation += 1
        if self.in_flight:
            logger.info("Form dismissed while a submission was in flight")

    async def submit(
        self, form: StudentFormData, editing: StudentRecord | None = None
    ) -> SubmissionResult:
        """Validate and commit a create (editing=None) or an edit.

        Returns:
            SubmissionResult describing what happened. The store is only
            touched when the status is COMMITTED.
        """
        if self.in_flight:
            logger.warning("Submission ignored: another one is in flight")
            return SubmissionResult(
                status=SubmissionStatus.BUSY,
                message="A submission is already in progress",
            )

        generation = self._generation
        self.in_flight = True
        try:
            verdict = await self.pipeline.run(form, creating=editing is None)
        finally:
            self.in_flight = False

        if generation != self._generation:
            logger.info("Discarding validation result for a dismissed form")
            return SubmissionResult(status=SubmissionStatus.DISCARDED)

        if verdict.status == VerdictStatus.FIELD_ERRORS:
            return SubmissionResult(
                status=SubmissionStatus.FIELD_ERRORS,
                field_errors=verdict.field_errors,
            )

        if verdict.status == VerdictStatus.REJECTED:
            return SubmissionResult(
                status=SubmissionStatus.REJECTED, message=verdict.message
            )

        assert verdict.draft is not None
        draft = verdict.draft
        if draft.profile_image is None:
            draft = replace(draft, profile_image=self.catalog.random_avatar())

        if editing is None:
            record = self.store.add_record(draft)
            logger.info(
                f"Student {record.id} added",
                extra={"student_id": record.id, "course_id": record.course_id},
            )
        else:
            self.store.update(
                replace(
                    editing,
                    name=draft.name,
                    email=draft.email,
                    course_id=draft.course_id,
                    profile_image=draft.profile_image,
                )
            )
            stored = self.store.get(editing.id)
            if stored is None:
                # Deleted while the form was open: the update was a no-op
                logger.info(
                    f"Student {editing.id} no longer exists, update ignored",
                    extra={"student_id": editing.id},
                )
                return SubmissionResult(
                    status=SubmissionStatus.DISCARDED,
                    message="Student no longer exists",
                )
            record = stored
            logger.info(
                f"Student {record.id} updated",
                extra={"student_id": record.id, "course_id": record.course_id},
            )

        return SubmissionResult(status=SubmissionStatus.COMMITTED, record=record)
