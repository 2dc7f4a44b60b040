"""
Read-only catalog reports.

Modules:
    hash_report - SHA-256 per product image and duplicate grouping
    image_review - CSV mapping products to files and inferred sources, HTML preview
"""

from .hash_report import (
    build_hash_report,
    find_duplicate_groups,
    image_reference,
    print_duplicate_summary,
    sha256_file,
    write_hash_report,
)
from .image_review import (
    build_review_rows,
    extract_local_filename,
    render_review_html,
    write_review_csv,
    write_review_html,
)

__all__ = [
    'build_hash_report',
    'find_duplicate_groups',
    'image_reference',
    'print_duplicate_summary',
    'sha256_file',
    'write_hash_report',
    'build_review_rows',
    'extract_local_filename',
    'write_review_csv',
    'render_review_html',
    'write_review_html',
]
