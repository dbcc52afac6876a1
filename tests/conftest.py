"""Shared test fixtures for all tests.

Fixtures are organized by component under tests/fixtures/ and re-exported
here so pytest discovers them everywhere.
"""

from tests.fixtures.config import isolated_home  # noqa: F401
from tests.fixtures.skills import always_available, loader_options, skill_roots  # noqa: F401
