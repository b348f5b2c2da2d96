from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FILE_NAME = "tinysh.log"


def setup_logging(level: str = "WARNING", log_dir: Optional[Path] = None) -> None:
    log_level = getattr(logging, str(level).upper(), logging.WARNING)

    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Remove any existing handlers to avoid duplicate logs in tests
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_dir / LOG_FILE_NAME, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        )

    logging.basicConfig(level=log_level, format=fmt, datefmt=datefmt, handlers=handlers)
