"""
Local Image Resolvers

Map a product id to an image file in the flat product images directory.

Two resolvers exist because the catalog has been populated under two
different filename conventions:

- NumericSuffixResolver understands every naming scheme that has been used
  for downloaded and curated images (pNNN, pp_user_pinNNN, pp_pin_<id>_*,
  ppNNN, ppp*<id>*). Its rule order is a precedence policy: when several
  files match, the earliest rule wins.
- LowercaseIdResolver only accepts <id>.jpg / <id>.png / <id>.jpeg with the
  id lower-cased.

Both return a bare filename (not a path) or None.
"""

import logging
import os
import re
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from ..common.constants import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

# (product_id, numeric_suffix, sorted directory listing) -> candidate filenames
CandidateRule = Callable[[str, str, List[str]], Iterable[str]]


def numeric_suffix(product_id: str) -> str:
    """
    Derive the zero-padded number used in image filenames.

    A leading "p" and every non-digit character are dropped, leading zeros
    are removed and the result is left-padded to three digits.

    >>> numeric_suffix("p007")
    '007'
    >>> numeric_suffix("p1234")
    '1234'
    """
    digits = re.sub(r"\D", "", product_id[1:] if product_id.startswith("p") else product_id)
    return digits.lstrip("0").rjust(3, "0")


def list_image_files(images_dir: str | Path) -> List[str]:
    """
    Names of regular files directly inside images_dir, sorted.

    Subdirectories are not descended into. A missing directory yields an
    empty listing.
    """
    try:
        with os.scandir(images_dir) as it:
            return sorted(entry.name for entry in it if entry.is_file())
    except FileNotFoundError:
        logger.warning("Images directory not found: %s", images_dir)
        return []


# ── Numeric-suffix rules, in precedence order ──────────────────────────────

def _exact_numeric(product_id: str, n: str, listing: List[str]) -> Iterator[str]:
    for ext in IMAGE_EXTENSIONS:
        yield f"p{n}.{ext}"


def _user_pin(product_id: str, n: str, listing: List[str]) -> Iterator[str]:
    yield f"pp_user_pin{n}.jpg"
    yield f"pp_user_pin{n}.png"


def _pin_prefixed(product_id: str, n: str, listing: List[str]) -> Iterator[str]:
    prefix = f"pp_pin_{product_id}_"
    for name in listing:
        if name.startswith(prefix):
            yield name


def _double_p_numeric(product_id: str, n: str, listing: List[str]) -> Iterator[str]:
    for ext in IMAGE_EXTENSIONS:
        yield f"pp{n}.{ext}"


def _triple_p_containing_id(product_id: str, n: str, listing: List[str]) -> Iterator[str]:
    for name in listing:
        if name.startswith("ppp") and product_id in name:
            yield name


class LocalResolver:
    """Base class: first candidate present in the directory listing wins."""

    name = "local"

    def __init__(self, images_dir: str | Path):
        self.images_dir = Path(images_dir)

    def candidates(self, product_id: str, listing: List[str]) -> Iterator[str]:
        raise NotImplementedError

    def resolve(self, product_id: str, listing: Optional[List[str]] = None) -> Optional[str]:
        """
        Return the filename of the first matching candidate, or None.

        Args:
            product_id: Catalog id, e.g. "p007"
            listing: Pre-computed directory listing (re-read when None)
        """
        if not product_id:
            return None
        if listing is None:
            listing = list_image_files(self.images_dir)
        present = set(listing)

        for candidate in self.candidates(product_id, listing):
            if candidate in present:
                logger.debug("%s: %s -> %s", self.name, product_id, candidate)
                return candidate
        return None


class NumericSuffixResolver(LocalResolver):
    """Resolve by the zero-padded numeric part of the id across all naming schemes."""

    name = "numeric-suffix"

    RULES: Tuple[CandidateRule, ...] = (
        _exact_numeric,
        _user_pin,
        _pin_prefixed,
        _double_p_numeric,
        _triple_p_containing_id,
    )

    def candidates(self, product_id: str, listing: List[str]) -> Iterator[str]:
        n = numeric_suffix(product_id)
        for rule in self.RULES:
            yield from rule(product_id, n, listing)


class LowercaseIdResolver(LocalResolver):
    """Resolve <id>.jpg, <id>.png or <id>.jpeg with the id lower-cased."""

    name = "lowercase-id"

    EXTENSIONS = ("jpg", "png", "jpeg")

    def candidates(self, product_id: str, listing: List[str]) -> Iterator[str]:
        lowered = product_id.lower()
        for ext in self.EXTENSIONS:
            yield f"{lowered}.{ext}"
