"""Validator registry and the single validation pass.

Central registry of all validators with factory functions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from policyspec.application.schema import MANIFEST_SCHEMA, resolve_schema
from policyspec.application.validators._base import BaseValidator
from policyspec.application.validators.attribute_validator import AttributeValidator
from policyspec.application.validators.manifest_validator import ManifestValidator
from policyspec.application.validators.threshold_validator import ThresholdValidator
from policyspec.domain.model.configuration import PolicySpecConfig
from policyspec.domain.model.schema import SchemaTable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.ports.validator import ValidatorProtocol

logger = logging.getLogger(__name__)

# Registry - tuple for immutability
# Order matters: validators are run in this order
_ALL_VALIDATORS: tuple[type[BaseValidator], ...] = (
    ManifestValidator,  # Always enabled
    AttributeValidator,  # Always enabled, strict_keys adds unknown-key errors
    ThresholdValidator,  # Always enabled
)

# Checked on every pass whatever validators or schema are configured:
# PolicyDocument refuses blocks without a valid enforcement level
_ENFORCEMENT_SCHEMA = SchemaTable(manifest={"enforcement": MANIFEST_SCHEMA["enforcement"]})
_ENFORCEMENT_CHECK = ManifestValidator()


def default_validators() -> tuple[ValidatorProtocol, ...]:
    """Instantiate validators with default configuration.

    Returns:
        Tuple of always-enabled validators
    """
    return validators_from_config(PolicySpecConfig())


def validators_from_config(config: PolicySpecConfig) -> tuple[ValidatorProtocol, ...]:
    """Instantiate validators based on config.

    Validators are created using their from_config() factory method.
    If from_config() returns None, the validator is disabled.

    Args:
        config: Loader configuration

    Returns:
        Tuple of enabled validators
    """
    validators: list[ValidatorProtocol] = []

    for validator_cls in _ALL_VALIDATORS:
        validator = validator_cls.from_config(config)
        if validator is not None:
            validators.append(validator)

    return tuple(validators)


def validate_document(
    document: ParsedDocument,
    *,
    config: PolicySpecConfig | None = None,
    validators: Sequence[ValidatorProtocol] | None = None,
) -> tuple[ValidationError, ...]:
    """Run every validator over the whole document.

    Exhaustive: all violations from all validators are collected,
    none stops the pass. manifest.enforcement is always checked against
    the built-in levels, even with explicit validators or a custom
    schema. Errors are ordered by location; ties keep validator order.

    Args:
        document: Parsed block forest
        config: Loader configuration. None = defaults.
        validators: Explicit validators. None = registry from config.

    Returns:
        All validation errors (empty if the document is valid)
    """
    config = config if config is not None else PolicySpecConfig()
    schema = resolve_schema(config.schema)
    active = tuple(validators) if validators is not None else validators_from_config(config)

    errors: list[ValidationError] = []
    for validator in active:
        errors.extend(validator.validate(document, schema))

    reported = {(e.subject, e.path, e.code) for e in errors}
    for error in _ENFORCEMENT_CHECK.validate(document, _ENFORCEMENT_SCHEMA):
        if (error.subject, error.path, error.code) not in reported:
            errors.append(error)

    errors.sort(key=lambda e: (e.location.line, e.location.column))
    logger.debug(
        "validated %s: %d validator(s), %d error(s)",
        document.source or "<string>",
        len(active),
        len(errors),
    )
    return tuple(errors)
