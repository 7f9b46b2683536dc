"""pytest plugin for policyspec.

Provides fixtures for asserting on a project's own policy document:
    policy_config: Loader configuration (override in conftest.py)
    policy_report: ValidationReport of the configured document
    policy_document: Validated PolicyDocument (errors fail the fixture)

Configuration (pytest.ini or pyproject.toml):
    policy_document: Path of the policy document, relative to rootdir
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from policyspec.presentation.pytest_plugin.fixtures import (
    DEFAULT_DOCUMENT,
    policy_config,
    policy_document,
    policy_report,
)

if TYPE_CHECKING:
    import pytest

# Export fixtures for pytest discovery
__all__ = [
    "policy_config",
    "policy_document",
    "policy_report",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        "policy_document",
        help=f"Policy document checked by policyspec fixtures (default: {DEFAULT_DOCUMENT})",
        default=DEFAULT_DOCUMENT,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "policy: mark test as policy document test",
    )
