"""
Settings for the Career Hub front-ends.

Values are read from environment variables, with a local ``.env`` file
loaded first when present.
"""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv(override=False)

CAREER_HUB_DEFAULT_BACKEND = ""
QUIZ_DEFAULT_BACKEND = "http://localhost:8000"
LOG_FORMAT = "%(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    backend_url: str
    session_db_path: str
    log_level: str


def get_settings(default_backend: str = CAREER_HUB_DEFAULT_BACKEND) -> Settings:
    """Load settings from the environment.

    Args:
        default_backend: Base URL used when ``BACKEND_URL`` is unset. The
            Career Hub uses same-origin (empty string), the quiz app a local host.
    """
    return Settings(
        backend_url=os.getenv("BACKEND_URL", "").strip().rstrip("/") or default_backend,
        session_db_path=os.getenv("SESSION_DB_PATH", "session.db").strip() or "session.db",
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # urllib3 logs every connection at debug
    logging.getLogger("urllib3").setLevel(logging.WARNING)
