"""Per-task log context: the player and match the crawl is working on."""
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator

_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("pipeline_log_context", default={})


def get_context() -> Dict[str, Any]:
    """Copy of the values bound by the enclosing ``context`` blocks."""
    return dict(_log_context.get())


@contextmanager
def context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind ``puuid=``/``match_id=``-style values for the duration of a block.

    None values are not bound. Blocks nest, and leaving one restores the
    outer values even when the block raises.
    """
    merged = {**_log_context.get(), **{k: v for k, v in values.items() if v is not None}}
    token = _log_context.set(merged)
    try:
        yield merged
    finally:
        _log_context.reset(token)
