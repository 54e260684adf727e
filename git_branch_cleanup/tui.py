"""Interactive TUI for git-branch-cleanup using Textual."""

import asyncio
from typing import List, Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Static

from .__version__ import __version__
from .constants import (
    CATEGORY_LABELS,
    CATEGORY_ORDER,
    COLUMNS,
    LEGEND_TEXT,
    SYMBOL_PROTECTED,
    SYMBOL_SELECTED,
    SYMBOL_UNSELECTED,
    TUI_PROTECTED_COLOR,
    TUI_RISK_COLORS,
)
from .exceptions import BranchCleanupError, ProtectedBranchSelectionError
from .formatters import (
    format_cleanup_summary,
    format_deletion_plan_items,
    format_risk_label,
    format_risky_confirmation,
    format_time_ago,
    format_upstream,
)
from .logging_config import get_log_file, get_logger
from .models.branch import Category, CleanupCandidate, CleanupCandidates
from .models.deletion import DeletionStep
from .models.selection import Selection
from .services.selection_service import SelectionPolicy

logger = get_logger(__name__)


class ConfirmScreen(ModalScreen[bool]):
    """Modal confirmation dialog."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #confirm-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
    """

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static(self.message, id="confirm-message")
            with Container(id="button-container"):
                yield Button("Delete", variant="error", id="yes")
                yield Button("Cancel", variant="primary", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press."""
        self.dismiss(event.button.id == "yes")


class InfoScreen(ModalScreen):
    """Modal info display dialog for errors and the legend."""

    DEFAULT_CSS = """
    InfoScreen {
        align: center middle;
    }

    #info-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #info-content {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #info-button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, info: str):
        super().__init__()
        self.info = info

    def compose(self) -> ComposeResult:
        with Vertical(id="info-dialog"):
            yield Static(self.info, id="info-content")
            with Container(id="info-button-container"):
                yield Button("Close", variant="primary", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()

    def action_close(self) -> None:
        self.dismiss()


class BranchCleanupApp(App):
    """Interactive branch cleanup with one tab per candidate category."""

    TITLE = "Git Branch Cleanup"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    #tabs {
        height: auto;
        padding: 0 1;
        background: $panel;
    }

    DataTable {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("1", "show_category('merged')", "Merged"),
        Binding("2", "show_category('stale')", "Stale"),
        Binding("3", "show_category('gone')", "Gone"),
        Binding("space", "toggle_branch", "Select"),
        Binding("a", "toggle_all", "Select All"),
        Binding("p", "toggle_prune", "Prune Remotes"),
        Binding("d", "delete_selected", "Delete"),
        Binding("r", "reload", "Reload"),
        Binding("l", "show_legend", "Legend"),
    ]

    def __init__(self, cleanup):
        super().__init__()
        self.cleanup = cleanup
        self.candidates = CleanupCandidates()
        self.selection = Selection()
        self.active_category = Category.MERGED
        self.prune_remotes = cleanup.config.prune_remotes
        self.deleting = False
        self._pending_plan: List[DeletionStep] = []

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield Header(show_clock=False)
        yield Static(id="tabs")
        yield DataTable(id="candidate-table", cursor_type="row", zebra_stripes=True)
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Set up the table and start loading candidates."""
        table = self.query_one(DataTable)
        table.add_column(Text(SYMBOL_UNSELECTED, justify="center"), key="mark")
        for col in COLUMNS:
            table.add_column(col.label, key=col.key, width=col.width or None)

        table.loading = True
        self.load_candidates()

    def _active_candidates(self) -> List[CleanupCandidate]:
        return self.candidates.for_category(self.active_category)

    def _cursor_candidate(self) -> Optional[CleanupCandidate]:
        table = self.query_one(DataTable)
        candidates = self._active_candidates()
        if table.cursor_row is None or table.cursor_row >= len(candidates):
            return None
        return candidates[table.cursor_row]

    def _refresh_view(self, keep_cursor: bool = True) -> None:
        table = self.query_one(DataTable)
        saved_row = table.cursor_row if keep_cursor else 0
        self._populate_table()
        self._update_tabs()
        self._update_status()
        if saved_row and saved_row < table.row_count:
            table.move_cursor(row=saved_row)

    def _populate_table(self) -> None:
        """Fill the table with the active category's candidates."""
        table = self.query_one(DataTable)
        table.clear()

        for candidate in self._active_candidates():
            if candidate.is_protected:
                mark = Text(SYMBOL_PROTECTED, justify="center")
            elif candidate.name in self.selection:
                mark = Text(SYMBOL_SELECTED, justify="center", style="bold")
            else:
                mark = Text(SYMBOL_UNSELECTED, justify="center")

            protection = ""
            if candidate.is_protected:
                protection = Text(candidate.protected_reason or "Protected", style=TUI_PROTECTED_COLOR)

            table.add_row(
                mark,
                Text(candidate.name, style=TUI_PROTECTED_COLOR if candidate.is_protected else ""),
                Text(format_risk_label(candidate.risk), style=TUI_RISK_COLORS[candidate.risk]),
                candidate.risk_reason,
                format_time_ago(candidate.branch.last_commit_timestamp),
                format_upstream(candidate),
                protection,
            )

    def _update_tabs(self) -> None:
        counts = self.candidates.counts()
        parts = []
        for index, category in enumerate(CATEGORY_ORDER, start=1):
            label = f"[{index}] {CATEGORY_LABELS[category]} ({counts[category]})"
            parts.append(f"[reverse]{label}[/reverse]" if category == self.active_category else label)
        self.query_one("#tabs", Static).update("   ".join(parts))

    def _update_status(self) -> None:
        """Update status bar with current stats."""
        risky = SelectionPolicy.risky_count(self.selection, self.candidates.all_candidates())
        all_selected = SelectionPolicy.is_all_selected(self.selection, self._active_candidates())
        self.query_one("#status-bar", Static).update(
            f"Selected: {len(self.selection)} | "
            f"Unpushed work: {risky} | "
            f"Tab fully selected: {'yes' if all_selected else 'no'} | "
            f"Prune remotes: {'on' if self.prune_remotes else 'off'}"
        )

    def action_show_category(self, category: str) -> None:
        self.active_category = Category(category)
        self._refresh_view(keep_cursor=False)

    def action_toggle_branch(self) -> None:
        """Toggle selection of the branch under the cursor."""
        candidate = self._cursor_candidate()
        if candidate is None:
            return
        try:
            self.selection = SelectionPolicy.toggle(self.selection, candidate)
        except ProtectedBranchSelectionError as e:
            self.notify(str(e), severity="warning")
            return
        self._refresh_view()

    def action_toggle_all(self) -> None:
        """Select or deselect every unprotected branch in the active tab."""
        self.selection = SelectionPolicy.toggle_select_all(self.selection, self._active_candidates())
        self._refresh_view()

    def action_toggle_prune(self) -> None:
        self.prune_remotes = not self.prune_remotes
        self._update_status()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle Enter key press on DataTable - triggers delete action."""
        self.action_delete_selected()

    def action_delete_selected(self) -> None:
        """Confirm and delete the selected branches."""
        if self.deleting:
            self.notify("Deletion already in progress", severity="warning")
            return
        if not self.selection:
            self.notify("No branches selected for deletion", severity="warning")
            return

        try:
            self._pending_plan = self.cleanup.plan(self.selection, self.candidates)
        except BranchCleanupError as e:
            self.push_screen(InfoScreen(str(e)))
            return

        count = len(self._pending_plan)
        message = (
            f"Delete {count} branch{'es' if count != 1 else ''}?\n\n"
            f"{format_deletion_plan_items(self._pending_plan)}"
        )
        risky = SelectionPolicy.risky_count(self.selection, self.candidates.all_candidates())
        if risky:
            message += f"\n\n{format_risky_confirmation(risky)}"

        self.push_screen(ConfirmScreen(message), self._handle_delete_confirmation)

    def _handle_delete_confirmation(self, confirmed: bool | None) -> None:
        """Handle delete confirmation result."""
        if not confirmed:
            self.notify("Deletion cancelled")
            return
        self.run_deletion(self._pending_plan)

    @work(exclusive=True, thread=False, group="delete")
    async def run_deletion(self, plan: List[DeletionStep]) -> None:
        """Execute the plan in a thread, then reload everything from scratch."""
        self.deleting = True
        table = self.query_one(DataTable)
        table.loading = True
        try:
            result = await asyncio.to_thread(self._execute_plan_sync, plan)
        except BranchCleanupError as e:
            logger.error(f"Error during deletion: {e}", exc_info=True)
            self.push_screen(InfoScreen(f"Error during deletion:\n\n{e}\n\nSee {get_log_file()} for details."))
            table.loading = False
            return
        finally:
            self.deleting = False

        summary = format_cleanup_summary(result)
        self.notify(summary, severity="information" if result.succeeded else "warning")

        problems = []
        if result.failed:
            problems.append(f"  • {result.failed.name}: {result.failed.message}")
        if result.skipped:
            problems.append(f"  • Not attempted: {', '.join(result.skipped)}")
        if result.prune_error:
            problems.append(f"  • Prune failed: {result.prune_error}")
        if problems:
            self.push_screen(InfoScreen(f"{summary}\n\n" + "\n".join(problems)))

        self.load_candidates()

    def _execute_plan_sync(self, plan: List[DeletionStep]):
        return asyncio.run(self.cleanup.execute_plan(plan, prune=self.prune_remotes))

    @work(exclusive=True, thread=False, group="load")
    async def load_candidates(self) -> None:
        """Load candidates in the background and reset the selection."""
        table = self.query_one(DataTable)
        table.loading = True
        try:
            self.candidates = await asyncio.to_thread(self.cleanup.load_candidates)
            self.selection = self.cleanup.default_selection(self.candidates)
            self.active_category = self.candidates.first_non_empty_category()
            self._refresh_view(keep_cursor=False)
            if self.candidates.is_empty:
                self.notify("No branches to clean up")
        except BranchCleanupError as e:
            logger.error(f"Error loading branches: {e}", exc_info=True)
            self.push_screen(InfoScreen(f"Error loading branches:\n\n{e}\n\nSee {get_log_file()} for details."))
        finally:
            table.loading = False

    def action_reload(self) -> None:
        if self.deleting:
            self.notify("Wait for the deletion to finish", severity="warning")
            return
        self.load_candidates()

    def action_show_legend(self) -> None:
        self.push_screen(InfoScreen(LEGEND_TEXT))
