# =============================================================================
# Storage Module
# =============================================================================
# Handles persistent storage of journal entries using SQLite.
#
# Provides:
#   - Database: schema creation, destructive recreation on version change,
#     raw insert/delete/read of entry rows
#   - EntryRepository: the observable, always-reconciled list of entries
#   - StorageIOError: the single error kind raised by this layer
#
# The database is stored in the XDG data directory (~/.local/share/daybook/).
# =============================================================================

from daybook.storage.database import SCHEMA_VERSION, Database, StorageIOError
from daybook.storage.repository import EntryRepository

__all__ = ["Database", "EntryRepository", "StorageIOError", "SCHEMA_VERSION"]
