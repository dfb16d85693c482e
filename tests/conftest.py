# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the Daybook test suite.
#
# Async tests and fixtures run under pytest-asyncio (asyncio_mode = "auto"
# in pyproject.toml).
# =============================================================================

import pytest
import tempfile
from datetime import date
from pathlib import Path

from daybook.core import JournalEntry
from daybook.storage import Database, EntryRepository


class FixedClock:
    """A settable stand-in for date.today."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir):
    """Path for a journal database inside the temp directory."""
    return temp_dir / "journal.db"


@pytest.fixture
def clock():
    """A clock fixed at 1 January 2024."""
    return FixedClock(date(2024, 1, 1))


@pytest.fixture
async def database(db_path):
    """A connected Database on a fresh file."""
    db = Database(db_path)
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
async def repo(database, clock):
    """An EntryRepository over the fresh database."""
    return await EntryRepository.create(database, clock=clock)


@pytest.fixture
def sample_entry():
    """Create a sample persisted JournalEntry."""
    return JournalEntry(
        id=1,
        text="Had a good day",
        rating=3,
        created_date="01/1/2024",
    )


@pytest.fixture
def isolated_xdg(temp_dir, monkeypatch):
    """Point every XDG directory into the temp directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "data"))
    monkeypatch.setenv("XDG_STATE_HOME", str(temp_dir / "state"))
    return temp_dir
