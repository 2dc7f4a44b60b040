"""
Catalog persistence.

Modules:
    store - load, atomically save and back up the product catalog JSON
"""

from .store import backup_catalog, load_catalog, now_ms, save_catalog, serialize_catalog

__all__ = ['load_catalog', 'save_catalog', 'serialize_catalog', 'backup_catalog', 'now_ms']
