"""
Catalog

Standalone in-memory catalog resource, kept separate from projects.
"""

from riverdb.catalog.store import SAMPLE_ITEMS, CatalogStore

__all__ = ["CatalogStore", "SAMPLE_ITEMS"]
