"""SQLite store for saved jobs, the read-only job lookup used by tailoring."""

import asyncio
import sqlite3
from datetime import datetime
from pathlib import Path

from jobmatch.core.schemas import JobListing, SavedJob

_SAVED_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS saved_jobs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    job_id          TEXT    NOT NULL UNIQUE,
    headline        TEXT    NOT NULL,
    employer_name   TEXT    NOT NULL DEFAULT '',
    workplace_city  TEXT,
    created_at      TEXT    NOT NULL
);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_SAVED_JOBS_TABLE)
    conn.commit()
    return conn


def save_job(conn: sqlite3.Connection, listing: JobListing) -> bool:
    """Insert a listing into saved jobs. Returns True if newly saved."""
    cursor = conn.execute(
        """
        INSERT INTO saved_jobs (job_id, headline, employer_name, workplace_city, created_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(job_id) DO NOTHING
        """,
        (
            listing.id,
            listing.headline or "",
            listing.employer_name,
            listing.city,
            datetime.now().isoformat(),
        ),
    )
    conn.commit()
    return cursor.rowcount > 0


def get_saved_job(conn: sqlite3.Connection, job_id: str) -> SavedJob | None:
    """Return the saved job with this id, or None."""
    row = conn.execute(
        "SELECT * FROM saved_jobs WHERE job_id = ?", (job_id,),
    ).fetchone()
    if row is None:
        return None
    return _row_to_saved_job(row)


def list_saved_jobs(conn: sqlite3.Connection) -> list[SavedJob]:
    """Return all saved jobs, oldest first."""
    rows = conn.execute("SELECT * FROM saved_jobs ORDER BY id").fetchall()
    return [_row_to_saved_job(r) for r in rows]


def _row_to_saved_job(row: sqlite3.Row) -> SavedJob:
    return SavedJob(
        job_id=row["job_id"],
        headline=row["headline"],
        employer_name=row["employer_name"],
        workplace_city=row["workplace_city"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class SavedJobStore:
    """Read-only ``JobLookup`` backed by the saved-jobs table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def get_headline(self, job_id: str) -> str | None:
        saved = await asyncio.to_thread(get_saved_job, self._conn, job_id)
        return saved.headline if saved is not None else None
