# =============================================================================
# UI Widgets
# =============================================================================
# Reusable components used by the screens.
# =============================================================================

from daybook.ui.widgets.entry_list import EntryList
from daybook.ui.widgets.entry_preview import EntryPreview

__all__ = ["EntryList", "EntryPreview"]
