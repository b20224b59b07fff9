# app/logging_config.py

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach one console handler to the root logger (idempotent)."""
    root = logging.getLogger()

    if not any(getattr(h, "_ariclear", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._ariclear = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    root.setLevel(level.upper())
