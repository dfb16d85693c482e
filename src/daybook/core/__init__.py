# =============================================================================
# Daybook Core Module
# =============================================================================
# This module contains the core domain model for Daybook. These are pure
# Python types with no external dependencies, so they can be imported
# anywhere without causing circular dependency issues.
#
#   - JournalEntry: A dated piece of text with a mood rating
#   - Rating: The four mood categories (horrible .. very well)
# =============================================================================

from daybook.core.entry import (
    UNRATED_GLYPH,
    JournalEntry,
    Rating,
    format_created_date,
    today_created_date,
)

__all__ = [
    "JournalEntry",
    "Rating",
    "UNRATED_GLYPH",
    "format_created_date",
    "today_created_date",
]
