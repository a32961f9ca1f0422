"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without latency or randomness:

- FakeCourseCatalog: Canned catalog, switchable failures, call tracking
- FakeRemoteValidator: Denylist check that can be held open or made to fail
- FakeClock: Manually advanced clock for deterministic timestamps
"""

from .catalog import FakeCourseCatalog
from .clock import FakeClock
from .validation import FakeRemoteValidator

__all__ = [
    "FakeClock",
    "FakeCourseCatalog",
    "FakeRemoteValidator",
]
