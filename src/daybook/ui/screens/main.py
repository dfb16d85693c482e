# =============================================================================
# Main Screen
# =============================================================================
# The primary view of Daybook, showing:
#   - Title: "My Daily Entries"
#   - Top panel: Entry table (newest first)
#   - Bottom panel: Preview of the highlighted entry
#
# The screen opens the journal database, builds the repository and
# subscribes to it. Every snapshot the repository publishes is redrawn in
# full; the screen never edits its table on its own.
# =============================================================================

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual.containers import Vertical

from daybook.config import Config
from daybook.core import JournalEntry
from daybook.storage import Database, EntryRepository, StorageIOError
from daybook.ui.screens.add_entry import AddEntryScreen, NewEntry
from daybook.ui.screens.confirm import ConfirmScreen
from daybook.ui.widgets.entry_list import EntryList
from daybook.ui.widgets.entry_preview import EntryPreview


logger = logging.getLogger(__name__)


class MainScreen(Screen):
    """
    The journal screen.

    Keybindings:
        - a: Add an entry
        - d / Delete: Delete the highlighted entry
        - e: See more / see less of the highlighted entry
        - j/k or arrows: Move through entries
        - ctrl+r: Reload from disk
    """

    BINDINGS = [
        Binding("a", "add_entry", "Add Entry"),
        Binding("d", "delete_entry", "Delete"),
        Binding("delete", "delete_entry", "Delete", show=False),
        Binding("e", "toggle_expand", "See more"),
        Binding("ctrl+r", "reload", "Reload", show=False),
    ]

    CSS = """
    #content {
        height: 1fr;
    }

    #title {
        text-align: center;
        text-style: bold;
        height: 3;
        padding: 1;
    }

    #entry-list {
        height: 60%;
        border-bottom: solid $primary;
    }

    #entry-preview {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-2;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, config: Config | None = None) -> None:
        """
        Initialize the main screen.

        Args:
            config: Application configuration. Defaults are used if omitted.
        """
        super().__init__()
        self._config = config or Config()
        self._db: Database | None = None
        self._repo: EntryRepository | None = None
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        """
        Compose the main screen layout.

        +--------------------------------------------------+
        |                    Header                         |
        +--------------------------------------------------+
        |                My Daily Entries                   |
        |                  Entry Table                      |
        |--------------------------------------------------|
        |                 Entry Preview                     |
        +--------------------------------------------------+
        | Status                                            |
        +--------------------------------------------------+
        |                    Footer                         |
        +--------------------------------------------------+
        """
        ui = self._config.ui
        yield Header()
        with Vertical(id="content"):
            yield Static("My Daily Entries", id="title")
            yield EntryList(preview_length=ui.preview_length, id="entry-list")
            yield EntryPreview(
                preview_length=ui.preview_length,
                expand_threshold=ui.expand_threshold,
                id="entry-preview",
                can_focus=False,
            )
        yield Static("Ready", id="status-line")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the database and load the journal."""
        self.update_status("Opening journal...")

        self._db = Database(self._config.database_path())
        try:
            await self._db.connect()
            self._repo = await EntryRepository.create(self._db)
        except StorageIOError as e:
            logger.error(f"Could not load journal: {e}")
            self.notify(f"Could not load journal: {e}", severity="error", timeout=10)
            self.update_status("Journal unavailable")
            return

        self._unsubscribe = self._repo.subscribe(self._on_entries_changed)
        self._on_entries_changed(self._repo.entries)
        self.query_one("#entry-list", EntryList).focus()

    async def on_unmount(self) -> None:
        """Drop the subscription and close the database."""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        if self._db:
            await self._db.close()

    # -------------------------------------------------------------------------
    # Repository Updates
    # -------------------------------------------------------------------------

    def _on_entries_changed(self, entries: tuple[JournalEntry, ...]) -> None:
        """Redraw the table and preview from a new snapshot."""
        entry_list = self.query_one("#entry-list", EntryList)
        entry_list.load_entries(entries)

        preview = self.query_one("#entry-preview", EntryPreview)
        selected = entry_list.get_selected_entry()
        if selected:
            preview.show_entry(selected)
        else:
            preview.clear()

        count = len(entries)
        self.update_status(f"{count} entr{'y' if count == 1 else 'ies'}")

    def update_status(self, text: str) -> None:
        """Update the status line."""
        self.query_one("#status-line", Static).update(text)

    def on_data_table_row_highlighted(self, event: EntryList.RowHighlighted) -> None:
        """Preview the entry under the cursor."""
        entry = self.query_one("#entry-list", EntryList).get_selected_entry()
        if entry:
            self.query_one("#entry-preview", EntryPreview).show_entry(entry)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_add_entry(self) -> None:
        """Open the add entry dialog."""
        if not self._repo:
            self.notify("Journal is not available", severity="error")
            return
        self.app.push_screen(AddEntryScreen(), self._save_new_entry)

    async def _save_new_entry(self, result: NewEntry | None) -> None:
        """Persist an entry returned by the add dialog."""
        if result is None or not self._repo:
            return
        try:
            await self._repo.add_entry(result.text, result.rating)
        except StorageIOError as e:
            self.notify(f"Could not save entry: {e}", severity="error")
            return
        self.notify("Entry saved", timeout=2)

    def action_delete_entry(self) -> None:
        """Delete the highlighted entry, asking first if configured to."""
        entry = self.query_one("#entry-list", EntryList).get_selected_entry()
        if entry is None or not self._repo:
            self.notify("No entry selected", severity="warning")
            return

        if not self._config.ui.confirm_delete:
            self.run_worker(self._delete(entry.id), exclusive=False)
            return

        async def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                await self._delete(entry.id)

        self.app.push_screen(
            ConfirmScreen(f"Delete the entry from {entry.created_date}?"),
            on_confirm,
        )

    async def _delete(self, entry_id: int) -> None:
        try:
            await self._repo.delete_entry(entry_id)
        except StorageIOError as e:
            self.notify(f"Could not delete entry: {e}", severity="error")
            return
        self.notify("Entry deleted", timeout=2)

    def action_toggle_expand(self) -> None:
        """Show more or less of the highlighted entry."""
        self.query_one("#entry-preview", EntryPreview).toggle_expanded()

    async def action_reload(self) -> None:
        """Reload entries from disk."""
        if not self._repo:
            return
        try:
            await self._repo.refresh()
        except StorageIOError as e:
            self.notify(f"Could not load entries: {e}", severity="error")
