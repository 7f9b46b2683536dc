"""python -m policyspec."""

from policyspec.presentation.cli import main

main()
