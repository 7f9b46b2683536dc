"""Ports: contracts users implement to extend policyspec."""

from policyspec.domain.ports.reporter import ReporterProtocol
from policyspec.domain.ports.validator import ValidatorProtocol

__all__ = [
    "ReporterProtocol",
    "ValidatorProtocol",
]
