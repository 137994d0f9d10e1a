import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_COLLECTION = "pflow_models"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOCK_TIMEOUT = 30.0


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_db_path() -> Path:
    """Get full path to the SQLite database file."""
    # Relative to the working directory unless PFLOW_DB_PATH says otherwise
    return Path(os.getenv("PFLOW_DB_PATH") or "pflow.db")


def get_collection() -> str:
    return os.getenv("PFLOW_COLLECTION") or DEFAULT_COLLECTION


def get_log_level() -> str:
    return (os.getenv("PFLOW_LOG_LEVEL") or "INFO").upper()


@dataclass
class ServerSettings:
    host: str
    port: int
    db_path: Path
    collection: str
    log_level: str
    lock_timeout: float


def load_settings() -> ServerSettings:
    """Build server settings from the environment (call after load_dotenv)."""
    return ServerSettings(
        host=os.getenv("PFLOW_HOST") or DEFAULT_HOST,
        port=_env_number("PFLOW_PORT", DEFAULT_PORT, int),
        db_path=get_db_path(),
        collection=get_collection(),
        log_level=get_log_level(),
        lock_timeout=_env_number("PFLOW_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT, float),
    )
