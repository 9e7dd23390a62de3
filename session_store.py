import logging
import sqlite3
from typing import Optional

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
TOKEN_KEY = "token"


class SessionStore:
    """Failure-safe key/value store for the theme preference and auth token.

    Reads fall back to a default on any storage error and writes are
    best-effort, so a missing or read-only database file never breaks the app.
    """

    def __init__(self, db_path: str = 'session.db'):
        """Remember the database path and create the table if possible."""
        self.db_path = db_path
        self._create_tables()

    def _get_connection(self):
        """Create and return a database connection."""
        return sqlite3.connect(self.db_path)

    def _create_tables(self):
        try:
            with self._get_connection() as conn:
                conn.execute('''
                    CREATE TABLE IF NOT EXISTS session (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        last_updated TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                ''')
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            logger.debug("Session store unavailable at %s: %s", self.db_path, e)

    def get(self, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Read a stored value.

        Args:
            key: Name of the stored entry
            fallback: Returned when the key is absent or storage fails

        Returns:
            The stored string, or ``fallback``
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute('SELECT value FROM session WHERE key = ?', (key,))
                row = cursor.fetchone()
        except (sqlite3.Error, OSError) as e:
            logger.debug("Session read of %r failed: %s", key, e)
            return fallback
        if row is None:
            return fallback
        return row[0]

    def set(self, key: str, value: str) -> bool:
        """
        Write a value, ignoring storage failures.

        Returns:
            bool: True if the write landed, False if storage rejected it
        """
        try:
            with self._get_connection() as conn:
                conn.execute('''
                    INSERT INTO session (key, value, last_updated)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        last_updated = CURRENT_TIMESTAMP
                ''', (key, str(value)))
                conn.commit()
            return True
        except (sqlite3.Error, OSError) as e:
            logger.debug("Session write of %r failed: %s", key, e)
            return False
