"""Command-line entry point for git-branch-cleanup"""

import sys
from rich.console import Console

from git_branch_cleanup.cli.args import parse_args
from git_branch_cleanup.config import CleanupConfig
from git_branch_cleanup.core import BranchCleanup
from git_branch_cleanup.exceptions import BranchCleanupError
from git_branch_cleanup.logging_config import setup_logging
from git_branch_cleanup.models.branch import BranchRule

console = Console()


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = None
    log_file = None
    try:
        parsed_args = parse_args(argv)

        use_interactive = parsed_args.interactive or (
            sys.stdin.isatty() and not parsed_args.no_interactive
        )

        log_file = setup_logging(
            verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_interactive
        )

        session_rules = [
            BranchRule(pattern=pattern, prevent_deletion=True) for pattern in parsed_args.protect
        ]

        config = CleanupConfig(
            stale_branch_days=parsed_args.stale_days,
            protection_rules=session_rules,
            category=parsed_args.category,
            prune_remotes=not parsed_args.no_prune,
            remote=parsed_args.remote,
            interactive=use_interactive,
            dry_run=parsed_args.dry_run,
            force=parsed_args.force,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[yellow]Logging to {log_file}[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        cleanup = BranchCleanup(parsed_args.path, config, tui_mode=use_interactive)

        if parsed_args.save_rules and session_rules:
            saved = cleanup.rule_store.add_rules(session_rules)
            console.print(f"[green]Saved {len(session_rules)} rules ({len(saved)} stored)[/green]")

        if use_interactive:
            from git_branch_cleanup.tui import BranchCleanupApp
            app = BranchCleanupApp(cleanup)
            app.run()
            return 0

        result = cleanup.process_branches(
            cleanup_enabled=not parsed_args.dry_run,
            selected_names=parsed_args.select,
        )
        if result is not None and result.has_failure:
            return 1
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except BranchCleanupError as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        if log_file is not None:
            console.print(f"[dim]Details in {log_file}[/dim]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
