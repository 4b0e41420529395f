from __future__ import annotations

import logging

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.logging.config import bootstrap_logging, shutdown_logging
from config.settings import settings
from presentation.cli import FinalizeMetaBuildsCommand

logger = logging.getLogger("scripts.finalize_meta_builds")


def main() -> int:
    bootstrap_logging(service="finalize", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="finalize.jsonl")
    try:
        FinalizeMetaBuildsCommand().run()
        return 0
    except Exception:
        logger.exception("finalize failed")
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
