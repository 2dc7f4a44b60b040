"""
Content-Hash Reporter

Hashes the local image file behind each product and groups products whose
files are byte-identical. Read-only with respect to the catalog.
"""

import hashlib
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..models import DuplicateGroup, HashEntry

logger = logging.getLogger(__name__)

# Field names that have carried the image reference, in lookup order
IMAGE_FIELDS = ("image_url", "image", "imageUrl", "img", "photo")
ID_FIELDS = ("id", "productId", "sku")
TITLE_FIELDS = ("title", "name")

_CHUNK_SIZE = 1024 * 1024


def _first_present(record: Mapping[str, Any], fields) -> Optional[str]:
    for name in fields:
        value = record.get(name)
        if value:
            return str(value)
    return None


def image_reference(record: Mapping[str, Any]) -> Optional[str]:
    """
    Site-relative image path of a record, without leading slash or query.

    Remote URLs are returned unchanged; records without an image give None.
    """
    raw = _first_present(record, IMAGE_FIELDS)
    if not raw or raw.startswith(("http://", "https://")):
        return raw
    return raw.split("?", 1)[0].lstrip("/") or None


def sha256_file(path: str | Path) -> str:
    """Hex SHA-256 digest of a file's contents."""
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.hexdigest()


def hash_entry(record: Mapping[str, Any], public_dir: str | Path) -> HashEntry:
    """Build the report entry for one catalog record."""
    image = image_reference(record)
    entry = HashEntry(
        id=_first_present(record, ID_FIELDS),
        title=_first_present(record, TITLE_FIELDS),
        image=image,
        path=None,
        exists=False,
    )
    if not image or image.startswith(("http://", "https://")):
        return entry

    path = (Path(public_dir) / image).resolve()
    if not path.is_file():
        return entry

    entry.exists = True
    entry.path = str(path)
    try:
        entry.sha256 = sha256_file(path)
    except OSError as e:
        logger.warning("Could not hash %s for %s: %s", path, entry.id, e)
    return entry


def build_hash_report(
    catalog: List[Mapping[str, Any]],
    public_dir: str | Path,
) -> List[HashEntry]:
    """One HashEntry per catalog record, in catalog order."""
    return [hash_entry(record, public_dir) for record in catalog if isinstance(record, Mapping)]


def find_duplicate_groups(entries: List[HashEntry]) -> List[DuplicateGroup]:
    """
    Group entries by digest, keeping groups with more than one entry.

    Groups are ordered by the first appearance of their digest.
    """
    by_hash: Dict[str, List[HashEntry]] = defaultdict(list)
    for entry in entries:
        if entry.sha256:
            by_hash[entry.sha256].append(entry)

    return [
        DuplicateGroup(sha256=digest, entries=items)
        for digest, items in by_hash.items()
        if len(items) > 1
    ]


def write_hash_report(entries: List[HashEntry], output_path: str | Path) -> Path:
    """Write the entry list as JSON, creating the parent directory."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([e.to_dict() for e in entries], f, indent=2, ensure_ascii=False)
    return output_path


def print_duplicate_summary(groups: List[DuplicateGroup]) -> None:
    """Print one block per duplicate group."""
    if not groups:
        print("No duplicates found")
        return

    for group in groups:
        print(f"\nDUPLICATE HASH {group.sha256} -> {len(group.entries)} files")
        for entry in group.entries:
            print(f" - {entry.id} : {entry.image}")
    print(f"\nTotal duplicate groups: {len(groups)}")
