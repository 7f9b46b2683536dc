"""Manifest validator: every block declares scope and enforcement."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from policyspec.application.validators._base import BaseValidator, ValueChecker
from policyspec.domain.model.block import MANIFEST_KEY
from policyspec.domain.model.values import MapValue

if TYPE_CHECKING:
    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.model.schema import SchemaTable


class ManifestValidator(BaseValidator):
    """Checks the reserved manifest sub-map of every block.

    A block without a manifest yields a single missing-manifest error,
    not one error per required manifest key.
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
            checker = ValueChecker(subject=str(block.ref), fallback=block.location, source=document.source)
            manifest = block.attributes.get(MANIFEST_KEY)

            if manifest is None:
                required = ", ".join(key for key, spec in schema.manifest.items() if spec.required)
                checker.error(
                    None,
                    "missing-manifest",
                    MANIFEST_KEY,
                    f"block declares no manifest (requires {required})",
                )
            elif not isinstance(manifest, MapValue):
                checker.error(manifest, "wrong-kind", MANIFEST_KEY, "manifest must be a map")
            else:
                checker.check_map(
                    manifest,
                    schema.manifest,
                    prefix=f"{MANIFEST_KEY}.",
                    report_unknown=self._strict_keys,
                )

            errors.extend(checker.errors)

        return tuple(errors)

    @classmethod
    def from_config(cls, config: PolicySpecConfig) -> Self | None:
        return cls(strict_keys=config.strict_keys)
