"""Command-line argument parsing for git-branch-cleanup."""

import argparse
from git_branch_cleanup.__version__ import __version__
from git_branch_cleanup.config import CATEGORY_FILTERS
from git_branch_cleanup.constants import DEFAULT_STALE_BRANCH_DAYS


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Find merged, stale and gone-upstream branches and clean them up safely",
        epilog="Protected branches (main, master, develop, development, staging, production, "
        "the current branch and anything matching a protection rule) are never deleted.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-branch-cleanup {__version__}")
    parser.add_argument("--path", default=".", help="Path to the repository (default: current directory)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview mode - show what would be deleted without actually deleting",
    )
    parser.add_argument("--force", action="store_true", help="Skip confirmations")
    parser.add_argument(
        "--interactive", action="store_true", help="Launch interactive TUI mode (default for TTY)"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Force non-interactive CLI mode (for scripts/automation)",
    )
    parser.add_argument(
        "--stale-days",
        type=int,
        default=DEFAULT_STALE_BRANCH_DAYS,
        help=f"Days without commits until a branch is stale, 0 disables (default: {DEFAULT_STALE_BRANCH_DAYS})",
    )
    parser.add_argument(
        "--protect",
        nargs="*",
        default=[],
        metavar="PATTERN",
        help="Extra branch patterns that must never be deleted (* matches anything)",
    )
    parser.add_argument(
        "--save-rules",
        action="store_true",
        help="Store the --protect patterns as protection rules for this repository",
    )
    parser.add_argument(
        "--category",
        choices=CATEGORY_FILTERS,
        default="all",
        help="Which candidate category to show (default: all)",
    )
    parser.add_argument(
        "--select",
        nargs="*",
        metavar="BRANCH",
        help="Delete exactly these branches instead of the default selection",
    )
    parser.add_argument(
        "--no-prune",
        action="store_true",
        help="Do not prune remote-tracking branches after deleting",
    )
    parser.add_argument("--remote", help="Only prune this remote (default: all remotes)")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    return parser.parse_args(argv)
