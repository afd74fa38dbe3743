import logging
import os
from dataclasses import dataclass, field
from typing import List

APP_TITLE = "Calculator API"
APP_VERSION = "1.0.0"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        port = env.get("PORT", "3000")
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port!r}") from None
        return cls(
            host=env.get("CALCULATOR_HOST", "0.0.0.0"),
            port=port,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            cors_origins=_split(env.get("CORS_ORIGINS", "*")) or ["*"],
        )


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
