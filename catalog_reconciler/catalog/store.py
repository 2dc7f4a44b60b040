"""
Catalog Store

Reads and rewrites the product catalog JSON file.

The catalog is a JSON array of product objects. It is always rewritten
wholesale: records are serialized in their original key order with 2-space
indentation, written to a temporary file next to the catalog and moved into
place with os.replace, so a failed write never leaves a truncated catalog.
"""

import json
import logging
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, List

from ..common.constants import BACKUP_SUFFIX
from ..common.errors import CatalogNotFoundError, CatalogParseError, CatalogWriteError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def load_catalog(path: str | Path) -> List[Dict[str, Any]]:
    """
    Load the catalog.

    Args:
        path: Path to the catalog JSON file

    Returns:
        List of product records in file order

    Raises:
        CatalogNotFoundError: If the file does not exist
        CatalogParseError: If the file is not valid JSON or not an array
    """
    path = Path(path)
    if not path.is_file():
        raise CatalogNotFoundError(f"Catalog not found at {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogParseError(f"Malformed catalog JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise CatalogParseError(
            f"Catalog {path} must contain a JSON array, got {type(data).__name__}"
        )

    logger.debug("Loaded %d records from %s", len(data), path)
    return data


_LONE_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def serialize_catalog(records: List[Dict[str, Any]]) -> str:
    """
    JSON text of the catalog: 2-space indent, non-ASCII kept readable.

    Lone surrogates (valid in JSON input, not encodable as UTF-8) are
    written back as \\uXXXX escapes.
    """
    payload = json.dumps(records, indent=2, ensure_ascii=False) + "\n"
    return _LONE_SURROGATE_RE.sub(lambda m: f"\\u{ord(m.group()):04x}", payload)


def save_catalog(path: str | Path, records: List[Dict[str, Any]]) -> None:
    """
    Atomically replace the catalog with the given records.

    The existing file's permission bits are carried over to the new file.

    Raises:
        CatalogWriteError: If the catalog cannot be serialized, written or moved
    """
    path = Path(path)

    tmp_name = None
    try:
        payload = serialize_catalog(records)
        with tempfile.NamedTemporaryFile(
            'w',
            encoding='utf-8',
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except (OSError, ValueError) as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise CatalogWriteError(f"Failed to write catalog {path}: {e}") from e

    logger.debug("Wrote %d records to %s", len(records), path)


def backup_catalog(path: str | Path, timestamp_ms: int | None = None) -> Path:
    """
    Copy the catalog to <path>.remote-backup-<unix-ms>.

    Returns:
        Path of the backup file

    Raises:
        CatalogWriteError: If the copy fails
    """
    path = Path(path)
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    backup_path = path.with_name(f"{path.name}{BACKUP_SUFFIX}{timestamp_ms}")

    try:
        shutil.copy2(path, backup_path)
    except OSError as e:
        raise CatalogWriteError(f"Failed to back up catalog to {backup_path}: {e}") from e

    logger.info("Backup created at %s", backup_path)
    return backup_path
