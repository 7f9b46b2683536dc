"""Schema validators for parsed policy documents.

Validators check a ParsedDocument against the schema table:
- ManifestValidator: manifest presence, scope, enforcement level
- AttributeValidator: per-kind attribute shapes
- ThresholdValidator: metric signs and percentage ranges
"""

from policyspec.application.validators._base import BaseValidator
from policyspec.application.validators._registry import (
    default_validators,
    validate_document,
    validators_from_config,
)
from policyspec.application.validators.attribute_validator import AttributeValidator
from policyspec.application.validators.manifest_validator import ManifestValidator
from policyspec.application.validators.threshold_validator import ThresholdValidator

__all__ = [
    # Base
    "BaseValidator",
    # Validators
    "ManifestValidator",
    "AttributeValidator",
    "ThresholdValidator",
    # Factory functions
    "default_validators",
    "validators_from_config",
    "validate_document",
]
