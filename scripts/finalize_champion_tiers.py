from __future__ import annotations

import asyncio
import logging

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core.logging.config import bootstrap_logging, shutdown_logging
from config.settings import settings
from presentation.cli import FinalizeChampionTiersCommand

logger = logging.getLogger("scripts.finalize_champion_tiers")


def main() -> int:
    bootstrap_logging(service="tiers", level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, log_file_name="tiers.jsonl")
    try:
        asyncio.run(FinalizeChampionTiersCommand().run())
        return 0
    except Exception:
        logger.exception("champion tiers finalize failed")
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
