"""
Data models for catalog image reconciliation.

This module contains pure data classes with no business logic.
"""

from .product import (
    DuplicateGroup,
    HashEntry,
    ImageChange,
    ItemError,
    JobResult,
    ProductRecord,
    UrlCheckResult,
)

__all__ = [
    'ProductRecord',
    'UrlCheckResult',
    'ImageChange',
    'HashEntry',
    'DuplicateGroup',
    'ItemError',
    'JobResult',
]
