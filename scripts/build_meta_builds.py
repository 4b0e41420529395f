from __future__ import annotations

import asyncio
import logging

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.logging.config import bootstrap_logging, shutdown_logging
from config.settings import settings
from presentation.cli import BuildMetaBuildsCommand

logger = logging.getLogger("scripts.build_meta_builds")


def main(s=settings) -> int:
    # console only until the key checks out; the file handler creates LOG_DIR
    bootstrap_logging(service="crawl", level=s.LOG_LEVEL)
    try:
        s.validate()
        bootstrap_logging(service="crawl", level=s.LOG_LEVEL, log_dir=s.LOG_DIR, log_file_name="crawl.jsonl")
        asyncio.run(BuildMetaBuildsCommand(s).run())
        return 0
    except Exception:
        logger.exception("crawl failed")
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
