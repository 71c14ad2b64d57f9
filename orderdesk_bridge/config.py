import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# .env lives in the project root, next to pyproject.toml
env_path = Path(__file__).resolve().parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

DEFAULT_SUBMIT_URL = "https://orderdesk-single-order-ship-65ffd8ceba36.herokuapp.com/"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    host: str = "0.0.0.0"
    submit_url: str = DEFAULT_SUBMIT_URL
    submit_max_attempts: int = 3
    submit_backoff_seconds: float = 1.0
    submit_timeout_seconds: Optional[float] = None
    csv_skip_lines: int = 4
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            port=int(os.getenv("PORT", "3000")),
            host=os.getenv("HOST", "0.0.0.0"),
            submit_url=os.getenv("SUBMIT_URL", DEFAULT_SUBMIT_URL),
            submit_max_attempts=int(os.getenv("SUBMIT_MAX_ATTEMPTS", "3")),
            submit_backoff_seconds=float(os.getenv("SUBMIT_BACKOFF_SECONDS", "1")),
            submit_timeout_seconds=_optional_float(os.getenv("SUBMIT_TIMEOUT_SECONDS")),
            csv_skip_lines=int(os.getenv("CSV_SKIP_LINES", "4")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
