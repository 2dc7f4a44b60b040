"""
Image Review Export

Writes a CSV mapping every product to its image file, content digest and
inferred image source, for manual review in a spreadsheet, plus an HTML
thumbnail page of the first products for a visual check.
"""

import logging
import re
from html import escape
from pathlib import Path
from typing import Any, Dict, List, Mapping

from ..common.constants import REVIEW_HTML_LIMIT, SITE_IMAGE_PREFIX
from ..common.csv_utils import write_csv
from .hash_report import sha256_file

logger = logging.getLogger(__name__)

REVIEW_COLUMNS = ["productId", "image_url", "filename", "sha256", "source"]

_LOCAL_PATH_RE = re.compile(r"/images/products/([^?]+)")
_BARE_FILENAME_RE = re.compile(r"([^/]+\.(?:jpg|jpeg|png|webp|svg))$", re.IGNORECASE)


def extract_local_filename(image_url: str) -> str:
    """Filename referenced by a local image URL, or "" for remote/empty URLs."""
    if not image_url:
        return ""
    match = _LOCAL_PATH_RE.search(image_url)
    if match:
        return match.group(1)
    match = _BARE_FILENAME_RE.search(image_url)
    if match:
        return match.group(1)
    return ""


def infer_local_source(filename: str) -> str:
    """Which pipeline produced a local file, judged by its naming scheme."""
    if filename.startswith("pp_pin_"):
        return "pinterest"
    if filename.startswith("ppp"):
        return "pixabay-remap"
    if filename.startswith("pp_user_pin"):
        return "user-pinterest"
    if "placeholder" in filename:
        return "placeholder"
    return "local"


def infer_remote_source(image_url: str) -> str:
    """Source label for a URL that does not resolve to an existing local file."""
    if "pixabay.com" in image_url:
        return "pixabay-external"
    if "pinimg.com" in image_url or "pinterest.com" in image_url:
        return "pinterest-external"
    if "/images/products/" in image_url:
        return "missing-local"
    return "external"


def build_review_rows(
    catalog: List[Mapping[str, Any]],
    images_dir: str | Path,
) -> List[Dict[str, str]]:
    """One review row per catalog record."""
    images_dir = Path(images_dir)
    rows = []
    for record in catalog:
        if not isinstance(record, Mapping):
            continue
        image_url = record.get("image_url") or ""
        if not isinstance(image_url, str):
            image_url = str(image_url)
        filename = extract_local_filename(image_url)
        local_path = images_dir / filename if filename else None

        sha = ""
        if local_path is not None and local_path.is_file():
            try:
                sha = sha256_file(local_path)
            except OSError as e:
                logger.warning("Could not hash %s: %s", local_path, e)
            source = infer_local_source(filename)
        else:
            source = infer_remote_source(image_url)

        rows.append({
            "productId": record.get("id") or "",
            "image_url": image_url.replace("\n", " "),
            "filename": filename,
            "sha256": sha,
            "source": source,
        })
    return rows


def write_review_csv(rows: List[Dict[str, str]], output_path: str | Path) -> Path:
    """Write review rows with a fixed header, even when empty."""
    write_csv(output_path, rows, fieldnames=REVIEW_COLUMNS)
    return Path(output_path)


_REVIEW_HTML_HEAD = (
    '<!doctype html><html><head><meta charset="utf-8"><title>Image Review</title>'
    '<style>body{font-family:Arial,sans-serif} '
    '.grid{display:grid;grid-template-columns:repeat(4,1fr);gap:12px} '
    '.card{background:#fff;padding:8px;border:1px solid #eee} '
    'img{width:100%;height:160px;object-fit:cover;background:#f5f4f2}</style></head><body>'
)


def render_review_html(
    catalog: List[Mapping[str, Any]],
    limit: int = REVIEW_HTML_LIMIT,
    site_prefix: str = SITE_IMAGE_PREFIX,
) -> str:
    """
    Thumbnail grid of the first `limit` products for a quick visual check.

    Local filenames are shown from the site images path; anything else
    links to the stored URL. All catalog text is HTML-escaped.
    """
    sample = [r for r in catalog[:limit] if isinstance(r, Mapping)]
    parts = [
        _REVIEW_HTML_HEAD,
        f"<h1>Product image review (first {len(sample)})</h1><div class=\"grid\">",
    ]
    for record in sample:
        image_url = record.get("image_url") or ""
        if not isinstance(image_url, str):
            image_url = str(image_url)
        filename = extract_local_filename(image_url)
        src = escape(f"{site_prefix}{filename}" if filename else image_url)
        name = escape(str(record.get("name") or ""))
        product_id = escape(str(record.get("id") or ""))
        parts.append(
            f'<div class="card"><h4>{product_id} - {name}</h4>'
            f'<a href="{src}" target="_blank"><img src="{src}" alt="{name}"/></a>'
            f'<p>{escape(image_url)}<br/><small>{escape(filename) or "(external)"}</small></p></div>'
        )
    parts.append("</div></body></html>")
    return "".join(parts)


def write_review_html(page: str, output_path: str | Path) -> Path:
    """Write a rendered review page, creating the parent directory if needed."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(page, encoding="utf-8")
    return output_path
