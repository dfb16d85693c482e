# =============================================================================
# Journal Entry Model
# =============================================================================
# Represents a single journal entry: a short piece of text written on a given
# day, tagged with a mood rating.
#
# Entries are immutable. They are created by the repository (storage assigns
# the id), live until deleted by id, and are never edited in place.
#
# The created date is stored as text in the "dd/M/yyyy" format, e.g.
# "05/3/2024" for 5 March 2024. Entries are sorted on that text, so ordering
# is lexicographic on the stored format rather than calendrical.
# =============================================================================

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Callable


class Rating(IntEnum):
    """
    Mood categories an entry can be tagged with, from worst to best.

    Storage accepts any integer as a rating. Values outside this enum
    (including 0, used when the user picked nothing) are "unrated" and
    are shown with a neutral marker.
    """
    HORRIBLE = 1
    BAD = 2
    WELL = 3
    VERY_WELL = 4

    @property
    def label(self) -> str:
        """Human-readable name shown on rating buttons."""
        return _RATING_LABELS[self]

    @property
    def glyph(self) -> str:
        """Single-character marker used in the entry table."""
        return _RATING_GLYPHS[self]

    @classmethod
    def from_value(cls, value: int) -> "Rating | None":
        """
        Look up a rating by its stored integer.

        Returns:
            The matching Rating, or None if the value is unrated.
        """
        try:
            return cls(value)
        except ValueError:
            return None


_RATING_LABELS = {
    Rating.HORRIBLE: "Horrible",
    Rating.BAD: "Bad",
    Rating.WELL: "Well",
    Rating.VERY_WELL: "Very well",
}

_RATING_GLYPHS = {
    Rating.HORRIBLE: "😫",
    Rating.BAD: "🙁",
    Rating.WELL: "🙂",
    Rating.VERY_WELL: "😄",
}

# Shown for entries whose rating is not 1-4
UNRATED_GLYPH = "·"


@dataclass(frozen=True)
class JournalEntry:
    """
    A persisted (or about to be persisted) journal entry.

    Attributes:
        id: Database primary key. 0 until the entry has been saved; ids are
            never reused after a delete.
        text: Free-form content. No length limit at the storage level.
        rating: Mood rating, nominally 1-4 (see Rating). Not validated.
        created_date: Creation day in "dd/M/yyyy" form. Not unique.

    Example:
        >>> entry = JournalEntry(id=1, text="Had a good day", rating=3,
        ...                      created_date="01/1/2024")
        >>> entry.mood
        <Rating.WELL: 3>
    """

    id: int
    text: str
    rating: int
    created_date: str

    @property
    def is_persisted(self) -> bool:
        """True once storage has assigned an id."""
        return self.id != 0

    @property
    def mood(self) -> Rating | None:
        """The rating as a Rating member, or None if unrated."""
        return Rating.from_value(self.rating)

    def __str__(self) -> str:
        """Human-readable representation: date, mood and a short excerpt."""
        mood = self.mood.label if self.mood else "unrated"
        excerpt = self.text if len(self.text) <= 30 else self.text[:27] + "..."
        return f"{self.created_date} [{mood}] {excerpt}"


# =============================================================================
# Created Date Formatting
# =============================================================================

def format_created_date(day: date) -> str:
    """
    Format a date the way entries store it: two-digit day, unpadded month,
    four-digit year ("dd/M/yyyy").

    strftime has no portable directive for an unpadded month, so the
    fields are formatted directly.

    Example:
        >>> format_created_date(date(2024, 1, 2))
        '02/1/2024'
        >>> format_created_date(date(2024, 11, 25))
        '25/11/2024'
    """
    return f"{day.day:02d}/{day.month}/{day.year:04d}"


def today_created_date(clock: Callable[[], date] | None = None) -> str:
    """
    Return today's created-date string.

    Args:
        clock: Optional callable returning "today". Defaults to date.today;
               tests pass a fixed clock.
    """
    today = (clock or date.today)()
    return format_created_date(today)
