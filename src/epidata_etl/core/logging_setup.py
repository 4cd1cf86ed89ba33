"""
Process-wide logging: console plus a rotating file under LOGS_DIR.
Library modules only call logging.getLogger(__name__); scripts call setup_logging() once.
"""
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path
from epidata_etl.core.config import LOGS_DIR, LOG_LEVEL
from epidata_etl.core.errors import ConfigurationError

DEFAULT_FMT = "%(asctime)s - %(levelname)-5s - %(name)s - %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# request/connection chatter from requests' transport
NOISY_LOGGERS = ("urllib3",)

def resolve_level(level: str | None) -> str:
    name = (level or LOG_LEVEL).strip().upper()
    if name not in LEVELS:
        raise ConfigurationError(f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}")
    return name

def setup_logging(level: str | None = None, file_name: str = "pipeline.log", logs_dir: str | Path = LOGS_DIR) -> None:
    """Configure the root logger once; ``level`` falls back to $LOG_LEVEL."""
    level = resolve_level(level)
    root = logging.getLogger()
    if getattr(setup_logging, "_configured", False):
        root.setLevel(level)
        return
    Path(logs_dir).mkdir(parents=True, exist_ok=True)
    root.setLevel(level)
    formatter = logging.Formatter(DEFAULT_FMT, datefmt=DATE_FMT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    rotating = logging.handlers.RotatingFileHandler(
        Path(logs_dir) / file_name, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(formatter)
    root.addHandler(rotating)

    # keep transport debug output out unless we are debugging ourselves
    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    setup_logging._configured = True
