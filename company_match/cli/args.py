"""
Argument parsing utilities for company_match CLI.

Provides standard argument patterns used across commands.
"""


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually execute the operation (default is dry-run)",
    )


def add_verbose_argument(parser):
    """Add standard --verbose argument."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug messages",
    )


def add_query_arguments(parser):
    """
    Add the four identity signal arguments.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument("--name", help="Company name")
    parser.add_argument("--website", help="Website or domain")
    parser.add_argument("--phone", help="Phone number")
    parser.add_argument("--facebook", help="Facebook URL or handle")
