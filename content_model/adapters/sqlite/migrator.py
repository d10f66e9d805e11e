"""
Schema migrations for the content database.

Migration files are named `NNNN_description.sql`; the part before
`-- Down` is applied. Each applied file is recorded with a checksum of
that script, and an applied file that has since been edited stops the run.
"""

import hashlib
import logging
import re
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATION_NAME = re.compile(r"^\d{4}_[a-z0-9_]+\.sql$")


class MigrationError(RuntimeError):
    """Raised when a migration cannot be applied or no longer matches its record."""


def _up_script(path: Path) -> str:
    return path.read_text().split("-- Down")[0]


def _checksum(script: str) -> str:
    return hashlib.sha256(script.encode("utf-8")).hexdigest()


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                filename TEXT PRIMARY KEY,
                checksum TEXT NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        return conn

    def _migration_files(self) -> list[Path]:
        files = sorted(self.migrations_dir.glob("*.sql"))
        for path in files:
            if not MIGRATION_NAME.match(path.name):
                raise MigrationError(f"Migration {path.name} is not named NNNN_description.sql")
        return files

    def pending(self) -> list[str]:
        """Filenames not applied yet, in apply order."""
        conn = self._get_connection()
        try:
            applied = self._check_applied(conn)
        finally:
            conn.close()
        return [p.name for p in self._migration_files() if p.name not in applied]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        conn = self._get_connection()
        applied_now = []
        try:
            applied = self._check_applied(conn)
            for path in self._migration_files():
                if path.name in applied:
                    continue
                logger.info("Applying migration: %s", path.name)
                self._apply(conn, path)
                applied_now.append(path.name)
        finally:
            conn.close()
        return applied_now

    def _check_applied(self, conn: sqlite3.Connection) -> set[str]:
        recorded = dict(conn.execute("SELECT filename, checksum FROM _migrations").fetchall())
        for filename, checksum in recorded.items():
            path = self.migrations_dir / filename
            if path.exists() and _checksum(_up_script(path)) != checksum:
                raise MigrationError(f"Migration {filename} was edited after it was applied")
        return set(recorded)

    def _apply(self, conn: sqlite3.Connection, path: Path) -> None:
        script = _up_script(path)
        try:
            conn.executescript(script)
            conn.execute(
                "INSERT INTO _migrations (filename, checksum) VALUES (?, ?)",
                (path.name, _checksum(script)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise MigrationError(f"Migration {path.name} failed: {e}") from e
