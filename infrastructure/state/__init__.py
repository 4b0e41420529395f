"""Durable crawl state."""
from .frontier_store import FrontierStore
from .aggregation_store import AggregationStore
from .json_files import read_json, write_json_atomic

__all__ = [
    'FrontierStore',
    'AggregationStore',
    'read_json',
    'write_json_atomic',
]
