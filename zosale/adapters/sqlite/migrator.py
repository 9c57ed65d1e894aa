import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).parent / "migrations"

DOWN_MARKER = "-- Down"


class SQLiteMigrator:
    """Applies the numbered ``.sql`` files in a directory, once each, in name order."""

    def __init__(self, db_path: str, migrations_dir: str | Path = DEFAULT_MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        return conn

    def _applied(self, conn: sqlite3.Connection) -> set[str]:
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    def _migration_files(self) -> list[Path]:
        return sorted(self.migrations_dir.glob("*.sql"))

    def pending(self) -> list[str]:
        """Migration files not yet applied, in apply order."""
        conn = self._connect()
        try:
            applied = self._applied(conn)
        finally:
            conn.close()
        return [p.name for p in self._migration_files() if p.name not in applied]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations. Returns the filenames applied."""
        Path(self.db_path).resolve().parent.mkdir(parents=True, exist_ok=True)

        conn = self._connect()
        applied_now: list[str] = []
        try:
            applied = self._applied(conn)
            for path in self._migration_files():
                if path.name in applied:
                    continue
                logger.info("Applying migration: %s", path.name)
                self._apply(conn, path)
                applied_now.append(path.name)
        finally:
            conn.close()

        logger.info("Store schema up to date (%d applied)", len(applied_now))
        return applied_now

    def _apply(self, conn: sqlite3.Connection, path: Path) -> None:
        # Only the part above the rollback section runs
        script = path.read_text(encoding="utf-8").split(DOWN_MARKER)[0]
        try:
            conn.executescript(script)
            conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (path.name,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise RuntimeError(f"Migration {path.name} failed: {e}") from e
