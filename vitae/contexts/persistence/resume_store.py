"""
Persistent SQLite store for resume records.

Stores one row per resume with the nested sections JSON-encoded, keyed by
resume id and owning user id. Reads go through the editing ingestion boundary,
so malformed rows are coerced to defaults rather than raising.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from vitae.contexts.editing.ingest import document_from_dict, document_to_dict
from vitae.contexts.editing.resume_data_structure import ResumeRecord
from vitae.contexts.persistence.logger import (
    _log_error,
    log_fetch_result,
    log_upsert_result,
)
from vitae.exceptions import StoreError
from vitae.utils.timestamp import now_exact

# JSON-encoded columns, in the order of the document sections
JSON_COLUMNS = (
    "personal_info",
    "experience",
    "education",
    "skills",
    "certifications",
    "languages",
    "interests",
    "projects",
    "references",
)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS resumes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,

        title TEXT NOT NULL,
        template_id INTEGER NOT NULL DEFAULT 0,

        personal_info TEXT,
        experience TEXT,
        education TEXT,
        skills TEXT,
        certifications TEXT,
        languages TEXT,
        interests TEXT,
        projects TEXT,
        "references" TEXT,

        job_description TEXT,
        updated_at TEXT NOT NULL
    )
"""


def _quoted(column: str) -> str:
    # "references" is an SQL keyword
    return f'"{column}"'


class ResumeStore:
    """
    SQLite store for resume records.

    Opening a store creates the database file and schema when missing.
    Records are always written wholesale (no partial updates).

    Example:
        with ResumeStore(Path("data/vitae.db")) as store:
            resume_id = store.upsert(record)
            latest = store.fetch_latest_or_by_id(record.user_id)
    """

    def __init__(self, db_path: Path):
        """
        Open (or create) a store.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.conn = sqlite3.connect(str(self.db_path))
            self.conn.row_factory = sqlite3.Row  # Enable column access by name
            self.conn.execute(SCHEMA)
            self.conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_user_updated ON resumes(user_id, updated_at)"
            )
            self.conn.commit()
        except sqlite3.Error as e:
            _log_error(f"Could not open resume store at {self.db_path}: {e}")
            raise StoreError(f"Could not open resume store: {self.db_path}") from e

    def __enter__(self) -> "ResumeStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """
        Execute SQL query and return results as list of dicts.

        Args:
            sql: SQL query string
            params: Query parameters (for parameterized queries)
        """
        try:
            cursor = self.conn.execute(sql, params)
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            _log_error(f"Query failed: {e}")
            raise StoreError("Failed to load resume data") from e

    def fetch_latest_or_by_id(
        self, user_id: str, resume_id: Optional[int] = None
    ) -> Optional[ResumeRecord]:
        """
        Fetch one resume for a user.

        Args:
            user_id: Owner of the resume
            resume_id: Explicit resume id; None selects the most recently updated

        Returns:
            ResumeRecord, or None when nothing matches
        """
        if resume_id is not None:
            rows = self.query(
                "SELECT * FROM resumes WHERE user_id = ? AND id = ?", (user_id, resume_id)
            )
        else:
            rows = self.query(
                "SELECT * FROM resumes WHERE user_id = ? ORDER BY updated_at DESC, id DESC LIMIT 1",
                (user_id,),
            )

        log_fetch_result(user_id, resume_id, found=bool(rows))
        return self._row_to_record(rows[0]) if rows else None

    def list_resumes(self, user_id: str) -> List[Dict[str, Any]]:
        """Summaries (id, title, template_id, updated_at) of a user's resumes, newest first."""
        return self.query(
            "SELECT id, title, template_id, updated_at FROM resumes "
            "WHERE user_id = ? ORDER BY updated_at DESC, id DESC",
            (user_id,),
        )

    def upsert(self, record: ResumeRecord) -> int:
        """
        Save a record wholesale, keyed by resume id + user id.

        Inserts when record.id is None, otherwise updates the matching row.
        The record's id, title and updated_at are refreshed in place.

        Returns:
            The resume id

        Raises:
            StoreError: If the update matches no row or the write fails
        """
        record.title = record.document.title
        record.updated_at = now_exact()
        values = self._record_to_row(record)

        try:
            if record.id is None:
                columns = list(values)
                cursor = self.conn.execute(
                    f"INSERT INTO resumes ({', '.join(_quoted(c) for c in columns)}) "
                    f"VALUES ({', '.join('?' * len(columns))})",
                    tuple(values[c] for c in columns),
                )
                record.id = cursor.lastrowid
                inserted = True
            else:
                assignments = ", ".join(f"{_quoted(c)} = ?" for c in values)
                cursor = self.conn.execute(
                    f"UPDATE resumes SET {assignments} WHERE id = ? AND user_id = ?",
                    (*values.values(), record.id, record.user_id),
                )
                if cursor.rowcount == 0:
                    self.conn.rollback()
                    raise StoreError(f"Resume {record.id} not found for user {record.user_id}")
                inserted = False
            self.conn.commit()
        except sqlite3.Error as e:
            _log_error(f"Save failed for user {record.user_id}: {e}")
            raise StoreError("Failed to save resume") from e

        log_upsert_result(record.user_id, record.id, inserted)
        return record.id

    def delete(self, user_id: str, resume_id: int) -> bool:
        """Delete a user's resume; returns whether a row was removed."""
        try:
            cursor = self.conn.execute(
                "DELETE FROM resumes WHERE id = ? AND user_id = ?", (resume_id, user_id)
            )
            self.conn.commit()
        except sqlite3.Error as e:
            _log_error(f"Delete failed for resume {resume_id}: {e}")
            raise StoreError("Failed to delete resume") from e
        return cursor.rowcount > 0

    def _record_to_row(self, record: ResumeRecord) -> Dict[str, Any]:
        """Flatten a record into column values (nested sections JSON-encoded)."""
        document = document_to_dict(record.document)
        row = {
            "user_id": record.user_id,
            "title": record.title,
            "template_id": record.template_id,
            "job_description": record.job_description,
            "updated_at": record.updated_at,
            "personal_info": json.dumps(document["personal"]),
        }
        for column in JSON_COLUMNS[1:]:
            row[column] = json.dumps(document[column])
        return row

    def _row_to_record(self, row: Dict[str, Any]) -> ResumeRecord:
        """Rebuild a record from a row; malformed columns fall back to defaults."""
        template_id = row.get("template_id")
        return ResumeRecord(
            id=row["id"],
            user_id=row["user_id"],
            title=row.get("title") or "",
            template_id=template_id if isinstance(template_id, int) else 0,
            document=document_from_dict(row),
            job_description=row.get("job_description") or "",
            updated_at=row.get("updated_at") or "",
        )
