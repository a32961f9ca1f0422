"""Integration tests for the composition root.

These tests verify that the bootstrap process correctly loads configuration,
instantiates adapters and wires them into a session.
"""

import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from roster.adapters.catalog.simulated import SimulatedCourseCatalog
from roster.adapters.validation.simulated import SimulatedRemoteValidator
from roster.config import load_settings
from roster.core.models import StudentFormData, SubmissionStatus
from roster.main import build_session, configure_logging


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        """Load settings with default values."""
        settings = load_settings()
        assert settings.search_debounce_ms == 300
        assert settings.catalog_delay_ms == 600
        assert settings.catalog_failure_rate == 0.1
        assert settings.remote_validation_delay_ms == 300
        assert settings.taken_emails == ["test@example.com", "admin@test.com"]
        assert settings.log_level == "INFO"

    def test_load_settings_from_env(self) -> None:
        """Load settings from environment variables."""
        with patch.dict(
            os.environ,
            {
                "SEARCH_DEBOUNCE_MS": "150",
                "CATALOG_FAILURE_RATE": "0",
                "TAKEN_EMAILS": '["dup@example.com"]',
                "LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
            assert settings.search_debounce_ms == 150
            assert settings.catalog_failure_rate == 0.0
            assert settings.taken_emails == ["dup@example.com"]
            assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self) -> None:
        """Load settings from an explicit .env file."""
        with tempfile.TemporaryDirectory() as tmp:
            env_file = Path(tmp) / "roster.env"
            env_file.write_text("CATALOG_DELAY_MS=5\nDEBUG=true\n")

            settings = load_settings(str(env_file))

            assert settings.catalog_delay_ms == 5
            assert settings.debug is True

    def test_load_settings_validates_delay(self) -> None:
        """Delay validation rejects negative values."""
        with patch.dict(os.environ, {"SEARCH_DEBOUNCE_MS": "-1"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_failure_rate(self) -> None:
        """Failure rate validation rejects values outside [0, 1]."""
        with patch.dict(os.environ, {"CATALOG_FAILURE_RATE": "1.5"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_load_settings_validates_log_level(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestSessionWiring:
    """Test that build_session wires the configured adapters."""

    def test_adapters_receive_settings(self) -> None:
        with patch.dict(
            os.environ,
            {
                "SEARCH_DEBOUNCE_MS": "25",
                "CATALOG_DELAY_MS": "0",
                "CATALOG_FAILURE_RATE": "0",
                "REMOTE_VALIDATION_DELAY_MS": "0",
            },
        ):
            session = build_session(load_settings())

        assert isinstance(session.catalog, SimulatedCourseCatalog)
        assert session.catalog.delay_ms == 0
        assert session.catalog.failure_rate == 0.0
        assert session.search.delay_ms == 25
        validator = session.submissions.pipeline.remote
        assert isinstance(validator, SimulatedRemoteValidator)
        assert "admin@test.com" in validator.taken_emails

    @pytest.mark.asyncio
    async def test_end_to_end_with_simulated_adapters(self) -> None:
        with patch.dict(
            os.environ,
            {
                "CATALOG_DELAY_MS": "0",
                "CATALOG_FAILURE_RATE": "0",
                "REMOTE_VALIDATION_DELAY_MS": "0",
            },
        ):
            session = build_session(load_settings())

        async with session:
            courses = await session.load_courses()
            assert courses.ready
            assert len(courses.courses or ()) == 6

            created = await session.submit(
                StudentFormData(name="Ann Lee", email="ann@x.com", course_id="3")
            )
            rejected = await session.submit(
                StudentFormData(name="Admin", email="admin@test.com", course_id="3")
            )

        assert created.status == SubmissionStatus.COMMITTED
        assert created.record is not None
        assert created.record.profile_image in session.catalog.avatars
        assert rejected.status == SubmissionStatus.REJECTED
        assert len(session.visible_students()) == 1


def test_configure_logging_sets_level() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    try:
        configure_logging("WARNING", "json")
        assert root.level == logging.WARNING
        assert root.handlers
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
