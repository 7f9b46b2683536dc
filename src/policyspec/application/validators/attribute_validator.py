"""Attribute validator: block attributes against the per-kind schema."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from policyspec.application.validators._base import BaseValidator, ValueChecker
from policyspec.domain.model.block import MANIFEST_KEY

if TYPE_CHECKING:
    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.model.schema import SchemaTable

_MANIFEST_ONLY = frozenset({MANIFEST_KEY})


class AttributeValidator(BaseValidator):
    """Checks required keys, value kinds, enumerations and signs.

    The manifest is left to ManifestValidator. Kinds without a schema
    entry are skipped. Unknown keys are reported when strict_keys is
    set or the kind's schema disallows them.
    """

    def __init__(self, *, strict_keys: bool = False) -> None:
        self._strict_keys = strict_keys

    def validate(
        self,
        document: ParsedDocument,
        schema: SchemaTable,
    ) -> tuple[ValidationError, ...]:
        errors: list[ValidationError] = []

        for block in document.blocks:
            block_schema = schema.for_kind(block.kind)
            if block_schema is None:
                continue
            checker = ValueChecker(subject=str(block.ref), fallback=block.location, source=document.source)
            checker.check_map(
                block.attributes,
                block_schema.attributes,
                prefix="",
                report_unknown=self._strict_keys or not block_schema.allow_unknown,
                skip=_MANIFEST_ONLY,
            )
            errors.extend(checker.errors)

        return tuple(errors)

    @classmethod
    def from_config(cls, config: PolicySpecConfig) -> Self | None:
        return cls(strict_keys=config.strict_keys)
