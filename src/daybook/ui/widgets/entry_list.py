# =============================================================================
# Entry List Widget
# =============================================================================
# A table view of journal entries.
#
# Columns: created date, mood marker, and a one-line excerpt of the text.
# The table is rebuilt from scratch every time the repository publishes a
# new snapshot; the cursor stays on the same entry when it still exists.
# =============================================================================

from rich.markup import escape
from textual.widgets import DataTable
from textual.binding import Binding
from typing import TYPE_CHECKING, Iterable

from daybook.core import UNRATED_GLYPH, Rating

if TYPE_CHECKING:
    from daybook.core import JournalEntry


def escape_markup(text: str) -> str:
    """Escape Rich markup in user content, including backslashes before tags."""
    return escape(text)


def rating_marker(rating: int) -> str:
    """Glyph shown for a rating; unrated values get a neutral dot."""
    mood = Rating.from_value(rating)
    return mood.glyph if mood else UNRATED_GLYPH


def excerpt(text: str, limit: int) -> str:
    """
    Flatten an entry to a single line and cut it at `limit` characters.

    Example:
        >>> excerpt("first line\\nsecond line", 14)
        'first line sec…'
    """
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[:limit].rstrip() + "…"


class EntryList(DataTable):
    """
    A table widget displaying journal entries, newest first.

    Usage:
        >>> entry_list = EntryList(preview_length=140)
        >>> entry_list.load_entries(repo.entries)
        >>> entry_list.get_selected_entry()
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Next", show=False),
        Binding("k", "cursor_up", "Previous", show=False),
    ]

    # Column configuration
    COLUMNS = [
        ("Created", 11),
        ("Mood", 4),
        ("Entry", 0),   # Flexible width
    ]

    def __init__(self, preview_length: int = 140, **kwargs) -> None:
        """
        Initialize the entry list.

        Args:
            preview_length: Characters of text shown per row.
            **kwargs: Additional arguments passed to DataTable.
        """
        super().__init__(**kwargs)
        self._preview_length = preview_length
        self._entries: list["JournalEntry"] = []

        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        # The screen may hand us entries before our own Mount has run
        if self.columns:
            return
        for label, width in self.COLUMNS:
            if width > 0:
                self.add_column(label, width=width)
            else:
                self.add_column(label)

    def load_entries(self, entries: Iterable["JournalEntry"]) -> None:
        """
        Replace the table contents with the given entries.

        Keeps the cursor on the previously selected entry if it is still
        present.
        """
        self._ensure_columns()
        selected = self.get_selected_entry()

        self.clear()
        self._entries = list(entries)

        for entry in self._entries:
            self.add_row(
                entry.created_date,
                rating_marker(entry.rating),
                escape_markup(excerpt(entry.text, self._preview_length)),
                key=str(entry.id),
            )

        if selected is not None:
            for index, entry in enumerate(self._entries):
                if entry.id == selected.id:
                    self.move_cursor(row=index)
                    break

    def get_selected_entry(self) -> "JournalEntry | None":
        """
        Get the entry under the cursor.

        Returns:
            Selected JournalEntry or None if the table is empty.
        """
        row = self.cursor_row
        if row is not None and 0 <= row < len(self._entries):
            return self._entries[row]
        return None

    @property
    def entry_count(self) -> int:
        """Number of entries currently shown."""
        return len(self._entries)
