# =============================================================================
# Daybook: A Terminal Mood Journal
# =============================================================================
#
# Daybook keeps short dated journal entries, each tagged with a mood rating
# from "horrible" to "very well". Entries can be written, browsed and
# deleted; they are never edited.
#
# Features:
#   - Local SQLite storage (XDG data directory)
#   - An always-reconciled, observable list of entries
#   - Textual terminal UI
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "daybook"

# Main entry point - this is what gets called by the 'daybook' command
from daybook.app import main

__all__ = ["main", "__version__", "__app_name__"]
