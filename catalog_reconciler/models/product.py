"""
Catalog and job data models.

Pure data classes for product records and the results the jobs produce.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional


def _text(value: Any) -> str:
    """Catalog field as text; falsy values (missing, null, 0) become an empty string."""
    return str(value) if value else ""


@dataclass(frozen=True)
class ProductRecord:
    """
    Read-only view of the catalog fields the image workflow uses.

    The catalog itself stays a list of plain dicts so that unknown fields
    and their order survive a rewrite untouched.
    """
    id: Optional[str]
    image_url: Optional[str] = None
    name: str = ""
    brand: str = ""
    category: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        image_url = data.get("image_url")
        return cls(
            id=_text(data.get("id")) or None,
            image_url=image_url if isinstance(image_url, str) else None,
            name=_text(data.get("name")),
            brand=_text(data.get("brand")),
            category=_text(data.get("category")),
        )

    @property
    def search_query(self) -> str:
        """Non-empty name, brand and category joined by spaces."""
        return " ".join(part for part in (self.name, self.brand, self.category) if part)

    @property
    def has_remote_image(self) -> bool:
        return bool(self.image_url) and self.image_url.startswith("http")


@dataclass
class UrlCheckResult:
    """Outcome of a liveness probe. Exactly one of status/error explains a failure."""
    ok: bool
    status: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"ok": self.ok}
        if self.status is not None:
            result["status"] = self.status
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class ImageChange:
    """An image_url rewrite applied to one product."""
    id: str
    old_url: Optional[str]
    new_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "from": self.old_url, "to": self.new_url}


@dataclass
class HashEntry:
    """One row of the content-hash report."""
    id: Optional[str]
    title: Optional[str]
    image: Optional[str]
    path: Optional[str]
    exists: bool
    sha256: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "image": self.image,
            "path": self.path,
            "exists": self.exists,
            "sha256": self.sha256,
        }


@dataclass
class DuplicateGroup:
    """Products whose image files share one content digest."""
    sha256: str
    entries: List[HashEntry] = field(default_factory=list)

    @property
    def ids(self) -> List[Optional[str]]:
        return [e.id for e in self.entries]


@dataclass
class ItemError:
    """A per-item failure that was recorded and skipped."""
    id: Optional[str]
    detail: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "url": self.url, "error": self.detail}


@dataclass
class JobResult:
    """
    Outcome of one reconciliation job.

    Fatal errors never produce a JobResult; they propagate as exceptions.
    A completed job is a success even when nothing changed.
    """
    job: str
    processed: int = 0
    ok: int = 0
    changes: List[ImageChange] = field(default_factory=list)
    errors: List[ItemError] = field(default_factory=list)
    skipped: int = 0
    wrote_catalog: bool = False
    backup_path: Optional[Path] = None
    artifact_path: Optional[Path] = None
    success: bool = True

    @property
    def changed(self) -> int:
        return len(self.changes)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
