import logging
import sqlite3
from datetime import datetime
from typing import Any, Optional
import json
import threading
from contextlib import contextmanager

LOGGER_NAME = "intentpy"


class IntentLogger:
    """Thread-safe logger that writes to stdout and, optionally, SQLite."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        log_level: int = logging.INFO,
        verbose: bool = False,
    ) -> None:
        """Create a new logger.

        Parameters
        ----------
        db_path:
            Path to an SQLite database used for log storage. ``None`` keeps
            logging console-only.
        log_level:
            Standard library logging level for console output.
        verbose:
            If False (default), only WARNING and ERROR level logs are
            emitted. If True, all levels down to ``log_level`` are emitted.
            DEBUG entries are never written to the database.
        """
        self.db_path = db_path
        self.log_level = log_level
        self.verbose = verbose
        self._lock = threading.RLock()
        self._local = threading.local()

        if self.db_path:
            self._ensure_table()

        self.logger = logging.getLogger(LOGGER_NAME)
        if not self.logger.handlers:
            console_level = logging.WARNING if not verbose else log_level
            self.logger.setLevel(console_level)
            handler = logging.StreamHandler()
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a thread-local database connection."""
        if getattr(self._local, "connection", None) is None:
            self._local.connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=10.0,
            )
        return self._local.connection

    @contextmanager
    def _db_context(self):
        """Context manager for thread-safe database operations."""
        with self._lock:
            conn = self._get_connection()
            try:
                yield conn
            except Exception:
                conn.rollback()
                raise
            else:
                conn.commit()

    def _ensure_table(self) -> None:
        with self._db_context() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT,
                    level TEXT,
                    action TEXT,
                    details TEXT
                )
                """
            )

    def log(self, level: str, action: str, details: Optional[Any] = None) -> None:
        """Log a message to stdout and, when configured, the database."""
        level_name = level.upper()
        numeric_level = getattr(logging, level_name, logging.INFO)

        if not self.verbose and numeric_level < logging.WARNING:
            return

        if details is not None and not isinstance(details, str):
            try:
                details_str = json.dumps(details, default=str)
            except (TypeError, ValueError):
                details_str = str(details)
        else:
            details_str = details or ""

        message = f"{action}: {details_str}" if details_str else action
        self.logger.log(numeric_level, message)

        if not self.db_path or numeric_level == logging.DEBUG:
            return
        try:
            with self._db_context() as conn:
                conn.execute(
                    "INSERT INTO logs (timestamp, level, action, details) VALUES (?, ?, ?, ?)",
                    (datetime.now().isoformat(), level_name, action, details_str),
                )
        except sqlite3.Error as exc:
            self.logger.error(f"Logger error: {exc} - Original message: {action}")

    def close(self) -> None:
        """Close the database connection for the current thread."""
        with self._lock:
            conn = getattr(self._local, "connection", None)
            if conn is not None:
                conn.close()
                self._local.connection = None

    def __enter__(self) -> "IntentLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
