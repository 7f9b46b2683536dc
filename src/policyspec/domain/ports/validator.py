"""Validator protocol for schema validators.

Users extend policyspec by implementing this Protocol.
Validators check a parsed block forest against the schema table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from policyspec.domain.exceptions import ValidationError
    from policyspec.domain.model.block import ParsedDocument
    from policyspec.domain.model.configuration import PolicySpecConfig
    from policyspec.domain.model.schema import SchemaTable


class ValidatorProtocol(Protocol):
    """Contract for validators.

    Validators are stateless: they never raise for a schema violation,
    they return every violation they find. The caller concatenates the
    results of all validators, so one pass reports everything.

    Key pattern: from_config() returns None if validator should be disabled.

    Example:
        class NoDraftValidator:
            code = "draft-block"

            def validate(
                self,
                document: ParsedDocument,
                schema: SchemaTable,
            ) -> tuple[ValidationError, ...]:
                return tuple(
                    ValidationError(
                        location=block.location,
                        code=self.code,
                        subject=str(block.ref),
                        message="draft blocks are not allowed",
                    )
                    for block in document.blocks
                    if block.name.startswith("draft_")
                )

            @classmethod
            def from_config(cls, config: PolicySpecConfig) -> Self | None:
                return cls()
    """

    def validate(
        self,
        document: ParsedDocument,
        schema: SchemaTable,
    ) -> tuple[ValidationError, ...]:
        """Validate all blocks and return violations.

        Args:
            document: Parsed block forest
            schema: Schema table to check against

        Returns:
            Tuple of violations found (empty if valid)
        """
        ...

    @classmethod
    def from_config(cls, config: PolicySpecConfig) -> Self | None:
        """Create validator from config.

        Args:
            config: Loader configuration

        Returns:
            Validator instance if enabled, None if disabled
        """
        ...
