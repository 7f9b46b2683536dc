"""Reporters for validation reports.

PlainTextReporter and JSONReporter use stdlib only.
ConsoleReporter renders rich tables.
"""

from policyspec.application.reporters._base import BaseReporter
from policyspec.application.reporters.console import ConsoleConfig, ConsoleReporter
from policyspec.application.reporters.json_reporter import JSONReporter, report_to_dict
from policyspec.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "PlainTextReporter",
    "JSONReporter",
    "ConsoleReporter",
    "ConsoleConfig",
    "report_to_dict",
]
