"""pytest fixtures for policy document testing.

User overrides policy_config in their conftest.py.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from policyspec.application.services import check_path
from policyspec.domain.exceptions import DocumentValidationError
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.document import PolicyDocument
from policyspec.domain.model.report import ValidationReport
from policyspec.infrastructure.config_file import load_config

DEFAULT_DOCUMENT = "POLICY.spec"


def _root_dir(config: pytest.Config) -> Path:
    # rootdir exists on pytest.Config but type stubs may not include it
    return Path(str(getattr(config, "rootdir", ".")))


@pytest.fixture(scope="session")
def policy_config(request: pytest.FixtureRequest) -> PolicySpecConfig:
    """Configuration from [tool.policyspec] in the rootdir pyproject.toml.

    User overrides this fixture in their conftest.py to provide
    custom configuration.
    """
    return load_config(root=_root_dir(request.config))


@pytest.fixture(scope="session")
def policy_report(
    request: pytest.FixtureRequest,
    policy_config: PolicySpecConfig,
) -> ValidationReport:
    """Check the configured policy document.

    Reads policy_document from pytest.ini (default POLICY.spec).

    Returns:
        ValidationReport (never raises for document problems)
    """
    name = str(request.config.getini("policy_document") or DEFAULT_DOCUMENT)
    path = _root_dir(request.config) / name

    if not path.is_file():
        raise FileNotFoundError(
            f"policy_document '{path}' does not exist. "
            f"Configure policy_document in pytest.ini or pyproject.toml.",
        )

    return check_path(path, config=policy_config)


@pytest.fixture(scope="session")
def policy_document(policy_report: ValidationReport) -> PolicyDocument:
    """Validated policy document.

    Raises:
        LexError, ParseError: Document is malformed.
        DocumentValidationError: Document has schema violations.
    """
    if policy_report.fatal is not None:
        raise policy_report.fatal
    if policy_report.document is None:
        raise DocumentValidationError(policy_report.errors)
    return policy_report.document
