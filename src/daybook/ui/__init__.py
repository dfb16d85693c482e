# =============================================================================
# UI Module
# =============================================================================
# Textual-based user interface for Daybook.
#
# Structure:
#   - screens/: Full-screen views and modal dialogs
#   - widgets/: Reusable UI components (entry table, entry preview)
#
# The UI is a thin layer over EntryRepository: it issues add/delete calls
# and redraws whenever the repository publishes a new snapshot.
# =============================================================================

from daybook.ui.screens.main import MainScreen
from daybook.ui.screens.add_entry import AddEntryScreen

from daybook.ui.widgets.entry_list import EntryList
from daybook.ui.widgets.entry_preview import EntryPreview

__all__ = [
    "MainScreen",
    "AddEntryScreen",
    "EntryList",
    "EntryPreview",
]
