# =============================================================================
# Entry Preview Widget
# =============================================================================
# Shows the highlighted entry: its date, mood and text.
#
# Long entries start collapsed (the first `preview_length` characters) and
# can be expanded to the full text and collapsed again.
# =============================================================================

from textual.widgets import Static
from textual.containers import ScrollableContainer
from typing import TYPE_CHECKING

from daybook.ui.widgets.entry_list import escape_markup

if TYPE_CHECKING:
    from daybook.core import JournalEntry


def collapsed_text(text: str, preview_length: int) -> str:
    """The part of an entry shown before it is expanded."""
    return text[:preview_length]


def can_expand(text: str, expand_threshold: int) -> bool:
    """Entries longer than the threshold offer "see more"."""
    return len(text) > expand_threshold


class EntryPreview(ScrollableContainer):
    """
    A widget for reading a single entry.

    Usage:
        >>> preview = EntryPreview()
        >>> preview.show_entry(entry)
        >>> preview.toggle_expanded()
    """

    DEFAULT_CSS = """
    EntryPreview {
        padding: 0 1;
    }

    EntryPreview > #preview-header {
        height: auto;
        margin-bottom: 1;
    }

    EntryPreview > #preview-body {
        height: auto;
    }

    EntryPreview > #preview-hint {
        height: auto;
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        preview_length: int = 140,
        expand_threshold: int = 20,
        **kwargs,
    ) -> None:
        """
        Initialize the entry preview.

        Args:
            preview_length: Characters shown while collapsed.
            expand_threshold: Length above which the entry can be expanded.
            **kwargs: Additional arguments passed to ScrollableContainer.
        """
        super().__init__(**kwargs)
        self._preview_length = preview_length
        self._expand_threshold = expand_threshold
        self._current_entry: "JournalEntry | None" = None
        self._expanded = False

    def compose(self):
        """Compose the widget."""
        yield Static("Select an entry to read it", id="preview-header")
        yield Static("", id="preview-body")
        yield Static("", id="preview-hint")

    def show_entry(self, entry: "JournalEntry") -> None:
        """
        Display an entry, collapsed.

        Args:
            entry: Entry to display.
        """
        if self._current_entry is None or self._current_entry.id != entry.id:
            self._expanded = False
        self._current_entry = entry
        self._render_entry()
        self.scroll_home(animate=False)

    def toggle_expanded(self) -> None:
        """Switch between the collapsed excerpt and the full text."""
        entry = self._current_entry
        if entry is None or not can_expand(entry.text, self._expand_threshold):
            return
        self._expanded = not self._expanded
        self._render_entry()

    def clear(self) -> None:
        """Clear the preview."""
        self._current_entry = None
        self._expanded = False
        self.query_one("#preview-header", Static).update("Select an entry to read it")
        self.query_one("#preview-body", Static).update("")
        self.query_one("#preview-hint", Static).update("")

    def _render_entry(self) -> None:
        entry = self._current_entry
        if entry is None:
            return

        mood = entry.mood.label if entry.mood else "Unrated"
        header = f"[bold]Created:[/] {escape_markup(entry.created_date)}    [bold]Mood:[/] {mood}"
        self.query_one("#preview-header", Static).update(header)

        if self._expanded:
            body = entry.text
        else:
            body = collapsed_text(entry.text, self._preview_length)
        self.query_one("#preview-body", Static).update(escape_markup(body) or "[dim]No content[/]")

        hint = ""
        if can_expand(entry.text, self._expand_threshold):
            hint = "e: see less" if self._expanded else "e: see more"
        self.query_one("#preview-hint", Static).update(hint)

    @property
    def current_entry(self) -> "JournalEntry | None":
        """Get the currently displayed entry."""
        return self._current_entry

    @property
    def expanded(self) -> bool:
        """True while the full text is shown."""
        return self._expanded
