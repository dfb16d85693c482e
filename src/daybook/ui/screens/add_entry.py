# =============================================================================
# Add Entry Screen
# =============================================================================
# A modal dialog for writing a new journal entry.
#
# The user writes about their day and picks one of four moods. Saving returns
# a NewEntry to the caller; the created date and id are assigned by the
# repository, not here.
# =============================================================================

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Static, TextArea, Button
from textual.containers import Vertical, Horizontal

from daybook.core import Rating


@dataclass
class NewEntry:
    """
    What the add dialog hands back.

    Attributes:
        text: The entry content.
        rating: Picked mood, or 0 if the user didn't pick one.
    """
    text: str
    rating: int = 0


class AddEntryScreen(ModalScreen[NewEntry | None]):
    """
    Modal screen for composing an entry.

    Keybindings:
        - Ctrl+S: Save
        - Escape: Cancel

    Returns:
        A NewEntry, or None if cancelled.
    """

    BINDINGS = [
        Binding("ctrl+s", "save", "Save"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    AddEntryScreen {
        align: center middle;
    }

    #add-entry-dialog {
        width: 72;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #add-entry-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #entry-text {
        height: 10;
        margin-bottom: 1;
    }

    #rating-buttons, #add-entry-buttons {
        align: center middle;
        height: auto;
    }

    #rating-buttons Button {
        margin: 0 1;
        min-width: 12;
    }

    #rating-display {
        text-align: center;
        color: $text-muted;
        margin: 1 0;
    }

    #add-entry-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self) -> None:
        """Initialize the add entry screen."""
        super().__init__()
        self._rating = 0

    def compose(self) -> ComposeResult:
        """Compose the add entry dialog."""
        with Vertical(id="add-entry-dialog"):
            yield Static("Add Entry", id="add-entry-title")
            yield TextArea(id="entry-text")
            with Horizontal(id="rating-buttons"):
                for mood in Rating:
                    yield Button(f"{mood.glyph} {mood.label}", id=f"rating-{mood.value}")
            yield Static("How was your day?", id="rating-display")
            with Horizontal(id="add-entry-buttons"):
                yield Button("Save", id="save-btn", variant="primary")
                yield Button("Cancel", id="cancel-btn")

    def on_mount(self) -> None:
        """Focus the text area when mounted."""
        self.query_one("#entry-text", TextArea).focus()

    @property
    def rating(self) -> int:
        """The currently picked rating (0 if none)."""
        return self._rating

    def select_rating(self, mood: Rating) -> None:
        """Pick a mood and highlight its button."""
        self._rating = int(mood)
        for other in Rating:
            button = self.query_one(f"#rating-{other.value}", Button)
            button.variant = "success" if other is mood else "default"
        self.query_one("#rating-display", Static).update(f"Mood: {mood.label}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id or ""
        if button_id == "save-btn":
            self.action_save()
        elif button_id == "cancel-btn":
            self.action_cancel()
        elif button_id.startswith("rating-"):
            self.select_rating(Rating(int(button_id.removeprefix("rating-"))))

    def action_save(self) -> None:
        """Return the entry to the caller."""
        text = self.query_one("#entry-text", TextArea).text
        if not text.strip():
            self.notify("Write something about your day first", severity="warning")
            return
        self.dismiss(NewEntry(text=text, rating=self._rating))

    def action_cancel(self) -> None:
        """Cancel and return None."""
        self.dismiss(None)
