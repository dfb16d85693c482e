# =============================================================================
# Database Connection and Schema Management
# =============================================================================
# Manages the SQLite database connection, the entry table and its schema
# version, and raw row-level reads and writes.
#
# Schema overview:
#   - journal_entries: One row per entry (id, text, rating, created_date)
#   - schema_version: Single-row marker holding the schema version
#
# Upgrades are destructive: when the recorded version differs from the one
# requested, the entry table is dropped and recreated empty. There is no
# column-level migration.
#
# Uses aiosqlite for async operations, with WAL mode for better
# concurrent performance.
# =============================================================================

import logging
from pathlib import Path

import aiosqlite

from daybook.config import Config
from daybook.core import JournalEntry


logger = logging.getLogger(__name__)

# Current schema version - bumping this wipes existing journals on next open
SCHEMA_VERSION = 1

ENTRY_TABLE = "journal_entries"

ENTRY_TABLE_DDL = f"""
CREATE TABLE {ENTRY_TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    text TEXT,
    rating INTEGER,
    created_date TEXT
)
"""


class StorageIOError(Exception):
    """Raised when opening, reading or writing the journal database fails."""
    pass


class Database:
    """
    Manages the SQLite database connection and the entry table.

    This class handles:
        - Opening the database file and enabling SQLite options
        - Creating the schema, and recreating it on a version change
        - Inserting, deleting and reading entry rows

    Every sqlite or OS failure surfaces as StorageIOError. Writes are
    committed per call; a failed write is rolled back so it has no effect.

    Usage:
        >>> db = Database(Path("journal.db"))
        >>> await db.connect()
        >>> entry_id = await db.insert("Had a good day", 3, "01/1/2024")
        >>> rows = await db.read_all()
        >>> await db.close()

    Attributes:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: Path | str | None = None) -> None:
        """
        Initialize the database manager.

        Args:
            db_path: Path to database file. Defaults to XDG data location.
                     ":memory:" opens a private in-memory database.
        """
        self.db_path = Path(db_path) if db_path else Config.default_database_path()
        self._connection: aiosqlite.Connection | None = None

    @property
    def is_memory(self) -> bool:
        """True for an in-memory database."""
        return str(self.db_path) == ":memory:"

    async def connect(self, schema_version: int = SCHEMA_VERSION) -> None:
        """
        Open the database connection and ensure the schema is at the
        requested version.

        Creates the database file if it doesn't exist.

        Args:
            schema_version: Version the entry table must be at.

        Raises:
            StorageIOError: If the file can't be opened or initialized.
        """
        logger.info(f"Opening journal database at {self.db_path}")
        try:
            if not self.is_memory:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self._connection = await aiosqlite.connect(self.db_path)

            # Enable WAL mode for better concurrent performance. The pragma
            # returns a row; the cursor must be closed before any COMMIT.
            async with self._connection.execute("PRAGMA journal_mode = WAL"):
                pass
        except (OSError, aiosqlite.Error) as e:
            await self.close()
            raise StorageIOError(f"Could not open database {self.db_path}: {e}") from e

        try:
            await self.initialize(schema_version)
        except StorageIOError:
            await self.close()
            raise

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """
        Get the active database connection.

        Raises:
            RuntimeError: If not connected.
        """
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    # =========================================================================
    # Schema Management
    # =========================================================================

    async def initialize(self, version_number: int) -> None:
        """
        Ensure the entry table exists at the given schema version.

        If the recorded version differs (or none is recorded), the entry
        table is dropped and recreated empty. Existing entries are lost.

        Args:
            version_number: Expected schema version.

        Raises:
            StorageIOError: If the schema can't be read or written.
        """
        current_version = await self.schema_version()

        if current_version == version_number:
            return

        if current_version is None:
            logger.info(f"Creating journal schema v{version_number}")
        else:
            logger.warning(
                f"Schema version changed ({current_version} -> {version_number}); "
                f"dropping {ENTRY_TABLE} and recreating it empty"
            )
        await self._recreate_schema(version_number)

    async def schema_version(self) -> int | None:
        """
        Read the recorded schema version.

        Returns:
            The stored version, or None for a fresh database.
        """
        try:
            async with self.conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
            ) as cursor:
                if await cursor.fetchone() is None:
                    # No marker table, this is a fresh database
                    return None

            async with self.conn.execute(
                "SELECT version FROM schema_version"
            ) as cursor:
                row = await cursor.fetchone()
                return row[0] if row else None
        except aiosqlite.Error as e:
            raise StorageIOError(f"Could not read schema version: {e}") from e

    async def _recreate_schema(self, version_number: int) -> None:
        """Drop and recreate the entry table, then record the version."""
        script = f"""
        BEGIN;
        DROP TABLE IF EXISTS {ENTRY_TABLE};
        {ENTRY_TABLE_DDL};
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        );
        DELETE FROM schema_version;
        INSERT INTO schema_version (version) VALUES ({int(version_number)});
        COMMIT;
        """
        try:
            await self.conn.executescript(script)
        except aiosqlite.Error as e:
            await self._rollback()
            raise StorageIOError(f"Could not create schema: {e}") from e

    # =========================================================================
    # Row Operations
    # =========================================================================

    async def insert(self, text: str, rating: int, created_date: str) -> int:
        """
        Append a new entry row.

        The rating is stored as given; no range check is made.

        Args:
            text: Entry content.
            rating: Mood rating.
            created_date: Creation day in "dd/M/yyyy" form.

        Returns:
            The id assigned to the new row.

        Raises:
            StorageIOError: If the row could not be committed.
        """
        try:
            cursor = await self.conn.execute(
                f"INSERT INTO {ENTRY_TABLE} (text, rating, created_date) VALUES (?, ?, ?)",
                (text, rating, created_date),
            )
            await self.conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise StorageIOError(f"Could not insert entry: {e}") from e

        logger.debug(f"Inserted entry {cursor.lastrowid}")
        return cursor.lastrowid

    async def delete_by_id(self, entry_id: int) -> None:
        """
        Remove the row with the given id.

        Deleting an id that doesn't exist is not an error.

        Raises:
            StorageIOError: If the delete could not be committed.
        """
        try:
            cursor = await self.conn.execute(
                f"DELETE FROM {ENTRY_TABLE} WHERE id = ?", (entry_id,)
            )
            await self.conn.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise StorageIOError(f"Could not delete entry {entry_id}: {e}") from e

        if cursor.rowcount == 0:
            logger.debug(f"Delete of entry {entry_id} matched no row")

    async def read_all(self, order_by_created_date_desc: bool = True) -> list[JournalEntry]:
        """
        Read every entry row.

        Args:
            order_by_created_date_desc: Order by created_date descending
                (text order on the stored format, newest id first within a
                day). When False, rows come back in insertion order.

        Returns:
            List of JournalEntry objects.

        Raises:
            StorageIOError: If the table can't be read.
        """
        if order_by_created_date_desc:
            order = "created_date DESC, id DESC"
        else:
            order = "id ASC"

        try:
            async with self.conn.execute(
                f"SELECT id, text, rating, created_date FROM {ENTRY_TABLE} ORDER BY {order}"
            ) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageIOError(f"Could not read entries: {e}") from e

        return [self._row_to_entry(row) for row in rows]

    def _row_to_entry(self, row) -> JournalEntry:
        """Convert a database row to a JournalEntry."""
        return JournalEntry(
            id=row[0],
            text=row[1] or "",
            rating=row[2] if row[2] is not None else 0,
            created_date=row[3] or "",
        )

    async def _rollback(self) -> None:
        """Roll back a failed write, keeping the original error as the one raised."""
        try:
            await self.conn.rollback()
        except aiosqlite.Error as e:
            logger.warning(f"Rollback failed: {e}")
