"""
Runtime configuration for LearnHub.

Values come from the environment, after loading an optional .env file at the
project root:

    LEARNHUB_CONTENT_DIR   lesson documents (default: data/content)
    LEARNHUB_PROGRESS_DB   reader state database (default: ~/.learnhub/progress.db)
    LEARNHUB_PERSIST_QUIZ  keep quiz attempts across sessions (default: false)
    LEARNHUB_LOG_LEVEL     logging level name (default: INFO)
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_CONTENT_DIR = PROJECT_ROOT / "data" / "content"
DEFAULT_STATE_DIR = Path.home() / ".learnhub"
DEFAULT_STATE_DB = DEFAULT_STATE_DIR / "progress.db"

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    content_dir: Path
    progress_db: Path
    persist_quiz: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        content_dir = os.environ.get("LEARNHUB_CONTENT_DIR")
        progress_db = os.environ.get("LEARNHUB_PROGRESS_DB")
        return cls(
            content_dir=Path(content_dir).expanduser() if content_dir else DEFAULT_CONTENT_DIR,
            progress_db=Path(progress_db).expanduser() if progress_db else DEFAULT_STATE_DB,
            persist_quiz=os.environ.get("LEARNHUB_PERSIST_QUIZ", "").strip().lower() in TRUE_VALUES,
            log_level=os.environ.get("LEARNHUB_LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    load_dotenv(PROJECT_ROOT / ".env")
    return Settings.from_env()
