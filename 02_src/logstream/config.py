"""Project-level configuration and path helpers."""

import os
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_STORE_PATH = DATA_DIR / "logs.json"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"
DEFAULT_CORS_ORIGIN = "http://localhost:5173"
DEFAULT_HUB_QUEUE_SIZE = 256

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_store_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve LOG_STORE_PATH to an absolute path."""
    if not env_value:
        return DEFAULT_STORE_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def cors_origins() -> list[str]:
    """Allowed CORS origins, comma separated in CORS_ORIGIN."""
    raw = os.getenv("CORS_ORIGIN", DEFAULT_CORS_ORIGIN)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def hub_queue_size() -> int:
    """Per-observer queue capacity for the live stream."""
    return int(os.getenv("HUB_QUEUE_SIZE", str(DEFAULT_HUB_QUEUE_SIZE)))


def sim_enabled() -> bool:
    """Whether the traffic simulator is wired into the API."""
    return os.getenv("SIM_ENABLED", "false").strip().lower() in ("1", "true", "yes")
