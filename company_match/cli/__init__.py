"""
CLI utilities for company_match.

This package provides shared functionality for commands:
- Logging setup
- Argument parsing
- Command entry points
"""

from company_match.cli.args import add_execute_argument, add_query_arguments, add_verbose_argument
from company_match.cli.commands import run_evaluate, run_ingest, run_query, run_stats
from company_match.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "print_dry_run_header",
    "print_execute_header",
    # Args
    "add_execute_argument",
    "add_query_arguments",
    "add_verbose_argument",
    # Commands
    "run_evaluate",
    "run_ingest",
    "run_query",
    "run_stats",
]
