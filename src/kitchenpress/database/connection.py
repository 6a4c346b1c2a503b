"""Database connection management."""

import shutil
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union

import structlog

logger = structlog.get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"
SEED_PATH = Path(__file__).parent / "seed.sql"

# Serializes writes issued through this process
_write_lock = threading.RLock()


class DatabaseConnection:
    """SQLite database connection manager."""

    def __init__(self, db_path: Union[str, Path]) -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Get database connection.

        Returns:
            SQLite connection object
        """
        return self.connect()

    def connect(self) -> sqlite3.Connection:
        """Get or create database connection.

        A database file that doesn't exist yet is created with the schema.

        Returns:
            SQLite connection object
        """
        if self._connection is None:
            needs_init = not self.db_path.exists()
            if not needs_init:
                self._check_integrity()
                needs_init = not self.db_path.exists()

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                str(self.db_path),
                timeout=30.0,
                check_same_thread=False,
            )

            self._connection.execute("PRAGMA foreign_keys = ON")
            self._connection.execute("PRAGMA journal_mode = WAL")
            self._connection.execute("PRAGMA synchronous = NORMAL")
            self._connection.execute("PRAGMA busy_timeout = 30000")
            self._connection.row_factory = sqlite3.Row

            if needs_init:
                self._initialize_schema()

            logger.info("database_connected", path=str(self.db_path))

        return self._connection

    def _initialize_schema(self) -> None:
        """Initialize database schema."""
        if self._connection is None:
            return
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            self._connection.executescript(f.read())
        self._connection.commit()
        logger.info("database_schema_initialized")

    def _check_integrity(self) -> None:
        """Move a corrupted database aside so a fresh one gets created."""
        try:
            test_conn = sqlite3.connect(str(self.db_path), timeout=5.0)
            try:
                result = test_conn.execute("PRAGMA quick_check").fetchone()[0]
            finally:
                test_conn.close()
        except sqlite3.DatabaseError as e:
            result = str(e)

        if result == "ok":
            return

        backup_path = self.db_path.with_suffix(".db.corrupted")
        logger.warning(
            "database_corruption_detected",
            result=result,
            backup_path=str(backup_path),
        )
        shutil.move(str(self.db_path), backup_path)
        for suffix in (".db-wal", ".db-shm"):
            sidecar = self.db_path.with_suffix(suffix)
            if sidecar.exists():
                sidecar.unlink()

    def close(self) -> None:
        """Close database connection with a WAL checkpoint."""
        if self._connection:
            try:
                self._connection.execute("PRAGMA wal_checkpoint(TRUNCATE)")
            except sqlite3.Error as e:
                logger.debug("wal_checkpoint_failed", error=str(e))

            self._connection.close()
            self._connection = None
            logger.info("database_closed")

    def execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a database query.

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            Cursor object
        """
        conn = self.connect()
        is_write = query.strip().upper().startswith(
            ("INSERT", "UPDATE", "DELETE", "CREATE", "DROP", "ALTER")
        )
        if is_write:
            with _write_lock:
                return conn.execute(query, params)
        return conn.execute(query, params)

    def executemany(self, query: str, params: list) -> sqlite3.Cursor:
        """Execute a query with multiple parameter sets.

        Args:
            query: SQL query string
            params: List of parameter tuples

        Returns:
            Cursor object
        """
        conn = self.connect()
        with _write_lock:
            return conn.executemany(query, params)

    def commit(self) -> None:
        """Commit current transaction."""
        if self._connection:
            with _write_lock:
                self._connection.commit()

    def rollback(self) -> None:
        """Rollback current transaction."""
        if self._connection:
            self._connection.rollback()

    def __enter__(self) -> "DatabaseConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        self.close()


def init_database(db_path: Union[str, Path], seed: bool = False) -> DatabaseConnection:
    """Initialize database with schema and optionally the knowledge base seed.

    Safe to run against an existing database: the schema only creates what is
    missing and seeding skips tables that already hold rows.

    Args:
        db_path: Path to SQLite database file
        seed: Load restaurant-industry knowledge base and brand guidelines

    Returns:
        DatabaseConnection object
    """
    db = DatabaseConnection(db_path)
    conn = db.connect()

    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
    conn.commit()

    if seed:
        seed_knowledge_base(db)

    logger.info("database_initialized", path=str(db.db_path), seeded=seed)

    return db


def seed_knowledge_base(db: DatabaseConnection) -> bool:
    """Load the knowledge base seed unless it is already present.

    Args:
        db: Database connection

    Returns:
        True if the seed was loaded, False if knowledge tables already had data
    """
    conn = db.connect()
    existing = conn.execute("SELECT COUNT(*) FROM knowledge_entities").fetchone()[0]
    if existing:
        logger.info("knowledge_base_already_seeded", entities=existing)
        return False

    with open(SEED_PATH, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
    conn.commit()

    logger.info("knowledge_base_seeded")
    return True
