# =============================================================================
# Entry Repository - Observable Journal State
# =============================================================================
# The single source of truth for "which entries exist right now".
#
# The repository is the only writer to the database. It keeps one in-memory
# snapshot of all entries, ordered by created date (newest first), and
# publishes a new snapshot to subscribers after every change.
#
# Every mutation is followed by a full re-read of the table. The snapshot is
# never patched locally, so after add_entry()/delete_entry() returns it is
# exactly what storage holds.
#
# Mutations are serialized with an asyncio.Lock: a write and the reload that
# follows it always run together before the next mutation starts.
# =============================================================================

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING, Callable

from daybook.core import JournalEntry, today_created_date

if TYPE_CHECKING:
    from daybook.storage.database import Database


logger = logging.getLogger(__name__)

# Receives each newly published snapshot
EntriesObserver = Callable[[tuple[JournalEntry, ...]], None]


class EntryRepository:
    """
    Owns the observable list of journal entries.

    Build it with ``await EntryRepository.create(db)``: the first load has
    completed by the time the handle is returned, so nobody ever sees an
    empty "not loaded yet" state.

    Usage:
        >>> repo = await EntryRepository.create(db)
        >>> unsubscribe = repo.subscribe(lambda entries: print(len(entries)))
        >>> await repo.add_entry("Had a good day", 3)
        >>> repo.entries[0].text
        'Had a good day'
        >>> await repo.delete_entry(repo.entries[0].id)

    Failure policy:
        - A failed write raises StorageIOError and skips the reload; the
          snapshot is untouched.
        - A successful write followed by a failed reload raises
          StorageIOError and keeps the previous snapshot.

    Attributes:
        db: Connected Database the repository reads and writes.
    """

    def __init__(
        self,
        db: "Database",
        clock: Callable[[], date] | None = None,
    ) -> None:
        """
        Initialize the repository without loading anything.

        Prefer create(), which also performs the initial load.

        Args:
            db: Connected Database instance.
            clock: Callable returning today's date, used for created dates.
        """
        self.db = db
        self._clock = clock
        self._entries: tuple[JournalEntry, ...] = ()
        self._observers: list[EntriesObserver] = []
        self._lock = asyncio.Lock()

    @classmethod
    async def create(
        cls,
        db: "Database",
        clock: Callable[[], date] | None = None,
    ) -> "EntryRepository":
        """
        Create a repository and load the current entries.

        Raises:
            StorageIOError: If the initial load fails.
        """
        repo = cls(db, clock=clock)
        await repo.refresh()
        return repo

    # =========================================================================
    # Observable State
    # =========================================================================

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        """The current snapshot, newest created date first."""
        return self._entries

    def observable_entries(self) -> tuple[JournalEntry, ...]:
        """Return the current snapshot. Same as the entries property."""
        return self._entries

    def get(self, entry_id: int) -> JournalEntry | None:
        """Find an entry in the current snapshot by id."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def subscribe(self, observer: EntriesObserver) -> Callable[[], None]:
        """
        Register a callback invoked with every new snapshot.

        The callback is not called for the current snapshot; read
        `entries` for that.

        Returns:
            A function that removes the subscription.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add_entry(
        self,
        text: str,
        rating: int,
        created_date: str | None = None,
    ) -> int:
        """
        Save a new entry and republish the full entry list.

        Args:
            text: Entry content.
            rating: Mood rating (stored as given).
            created_date: Override for the created date. Defaults to today
                          in "dd/M/yyyy" form.

        Returns:
            The id storage assigned to the entry.

        Raises:
            StorageIOError: If the insert or the reload fails.
        """
        if created_date is None:
            created_date = today_created_date(self._clock)

        async with self._lock:
            entry_id = await self.db.insert(text, rating, created_date)
            logger.info(f"Added entry {entry_id} ({created_date}, rating {rating})")
            await self._reload()
        return entry_id

    async def delete_entry(self, entry_id: int) -> None:
        """
        Delete an entry by id and republish the full entry list.

        A missing id is not an error; the list is reloaded anyway.

        Raises:
            StorageIOError: If the delete or the reload fails.
        """
        async with self._lock:
            await self.db.delete_by_id(entry_id)
            logger.info(f"Deleted entry {entry_id}")
            await self._reload()

    async def refresh(self) -> None:
        """
        Reload every entry from storage and republish.

        Raises:
            StorageIOError: If the read fails. The snapshot is kept.
        """
        async with self._lock:
            await self._reload()

    async def _reload(self) -> None:
        """Read the whole table and publish it. Caller holds the lock."""
        try:
            rows = await self.db.read_all(order_by_created_date_desc=True)
        except Exception:
            logger.error("Reloading entries failed; keeping previous snapshot", exc_info=True)
            raise

        self._entries = tuple(rows)
        logger.debug(f"Loaded {len(self._entries)} entries")
        self._publish()

    def _publish(self) -> None:
        """Notify observers of the current snapshot."""
        snapshot = self._entries
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.warning("Entry observer raised", exc_info=True)
