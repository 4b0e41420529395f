"""Static game data collaborators."""
from .item_catalog import ItemCatalog

__all__ = ['ItemCatalog']
