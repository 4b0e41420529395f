from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, QueueHandler, QueueListener
from queue import Queue
from pathlib import Path
from typing import Optional

from .levels import register_levels, to_level
from .formatter import ConsoleFormatter, JSONFormatter

_listener: QueueListener | None = None


class ServiceFilter(logging.Filter):
    """Stamps the entry point's service name on records that lack one."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "service", None) is None:
            record.service = self.service
        return True


def bootstrap_logging(
    *,
    service: str = "pipeline",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "pipeline.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Console handler plus a JSON-lines file fed through a queue listener.

    ``LOG_CONSOLE`` (default true) and ``LOG_CONSOLE_LEVEL`` control the
    console; the file handler is installed only when ``log_dir`` is given.
    """
    global _listener
    shutdown_logging()
    register_levels()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)
    service_filter = ServiceFilter(service)

    enable_console = os.getenv("LOG_CONSOLE", "true").strip().lower() in ("1", "true", "yes")
    console_level_str = os.getenv("LOG_CONSOLE_LEVEL", "").strip()
    if enable_console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(to_level(console_level_str) if console_level_str else lvl)
        console.setFormatter(ConsoleFormatter(use_color=sys.stderr.isatty()))
        console.addFilter(service_filter)
        root.addHandler(console)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        json_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        json_handler.setLevel(lvl)
        json_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        qh = QueueHandler(q)
        qh.addFilter(service_filter)
        root.addHandler(qh)
        _listener = QueueListener(q, json_handler, respect_handler_level=True)
        _listener.start()

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(lvl, logging.WARNING))


def shutdown_logging() -> None:
    """Flush the file listener. Safe to call more than once."""
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
