# =============================================================================
# UI Screens
# =============================================================================
# Full-screen views and dialogs.
#
#   - MainScreen: Entry table with preview
#   - AddEntryScreen: Modal for writing an entry and picking a mood
#   - ConfirmScreen: Yes/no modal used before deleting
# =============================================================================

from daybook.ui.screens.main import MainScreen
from daybook.ui.screens.add_entry import AddEntryScreen, NewEntry
from daybook.ui.screens.confirm import ConfirmScreen

__all__ = ["MainScreen", "AddEntryScreen", "NewEntry", "ConfirmScreen"]
