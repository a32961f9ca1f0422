"""Composition root for the Roster student data layer.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Session construction (store, debouncer, validation, catalog)
- Interactive command shell
"""

import asyncio
import json
import logging
import sys
from typing import Any

from roster.adapters.catalog.simulated import SimulatedCourseCatalog
from roster.adapters.cli.commands import CLICommandHandler, run_command
from roster.adapters.presentation.stdout import StdoutRosterView
from roster.adapters.validation.simulated import SimulatedRemoteValidator
from roster.config import Settings, load_settings
from roster.core.session import RosterSession
from roster.core.store import EntityStore


async def _run_cli_interactive(cli_handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for roster commands.

    Args:
        cli_handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read from stdin in a thread so debounce timers keep running
            command_line = await loop.run_in_executor(None, input, "roster> ")

            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            if not isinstance(args, dict):
                logger.error("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            try:
                result = await run_command(cli_handler, command, args)
                _print_result(result)
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _print_result(result: dict[str, Any]) -> None:
    data = result.get("data")
    if isinstance(data, str):
        print(data)
    else:
        print(json.dumps(result, indent=2, default=str))


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  list
    List students matching the current search and course filter.
    Example: list {"format": "text"}

  add
    Add a student. Required: name, email, course_id. Optional: profile_image
    Example: add {"name": "Ann Lee", "email": "ann@example.com", "course_id": 1}

  edit
    Edit a student. Required: student_id. Optional: name, email, course_id, profile_image
    Example: edit {"student_id": "id-here", "course_id": 3}

  delete
    Delete a student. Required: student_id
    Example: delete {"student_id": "id-here"}

  search
    Search by name or email (applied after a short pause).
    Example: search {"term": "ann"}

  clear
    Clear the search immediately.

  filter
    Filter by course; omit course_id to show all courses.
    Example: filter {"course_id": 2}

  courses
    Show the course catalog.

  retry
    Retry loading the course catalog after a failure.

  stats
    Enrollment counts per course for the visible students.

  avatar
    Suggest a random profile image URL.

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_session(settings: Settings) -> RosterSession:
    """Instantiate adapters and wire them into a new session."""
    catalog = SimulatedCourseCatalog(
        delay_ms=settings.catalog_delay_ms,
        failure_rate=settings.catalog_failure_rate,
    )
    remote_validator = SimulatedRemoteValidator(
        delay_ms=settings.remote_validation_delay_ms,
        taken_emails=settings.taken_emails,
    )
    return RosterSession(
        store=EntityStore(),
        catalog=catalog,
        remote_validator=remote_validator,
        search_debounce_ms=settings.search_debounce_ms,
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the shell.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Build the session (store, catalog, validator)
    4. Load the course catalog
    5. Run the interactive shell until exit

    The session is closed on every exit path so no debounced search
    fires after the shell is gone.
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Loading Roster...")

    session = build_session(settings)
    view = StdoutRosterView(verbose=settings.debug)
    unsubscribe = session.store.subscribe(view.on_state_change)

    try:
        state = await session.load_courses()
        if state.courses is not None:
            view.set_courses(state.courses)
        else:
            logger.warning(f"{state.error}. Use 'retry' to load the course catalog again.")

        await _run_cli_interactive(CLICommandHandler(session, view))
    finally:
        unsubscribe()
        session.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
