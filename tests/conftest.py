"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from catalog_reconciler.common.settings import ReconcilerSettings


@pytest.fixture
def project_root(tmp_path):
    """Temporary storefront tree with entities/ and public/images/products/."""
    (tmp_path / "entities").mkdir()
    (tmp_path / "public" / "images" / "products").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def images_dir(project_root):
    return project_root / "public" / "images" / "products"


@pytest.fixture
def catalog_path(project_root):
    return project_root / "entities" / "products-data.json"


@pytest.fixture
def write_catalog(catalog_path):
    """Write a list of records as the catalog and return its path."""
    def _write(records):
        catalog_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        return catalog_path
    return _write


@pytest.fixture
def read_catalog(catalog_path):
    def _read():
        return json.loads(catalog_path.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def add_image(images_dir):
    """Create an image file in the images directory."""
    def _add(name: str, content: bytes = b"\x89PNG fake image") -> Path:
        path = images_dir / name
        path.write_bytes(content)
        return path
    return _add


@pytest.fixture
def settings(project_root):
    """Default-layout settings rooted at the temporary tree."""
    return ReconcilerSettings.for_root(project_root)


@pytest.fixture
def sample_catalog():
    """Small catalog covering local, remote and empty image references."""
    return [
        {"id": "p001", "name": "Argan Shampoo", "brand": "Moroccanoil",
         "category": "shampoo", "price": 1200, "image_url": None},
        {"id": "p002", "name": "Hair Mask", "brand": "Olaplex",
         "category": "treatment", "image_url": "https://cdn.pixabay.com/photo/x.jpg"},
        {"id": "p007", "name": "Vitamin C", "brand": "",
         "category": "supplements", "image_url": "/images/products/old.jpg"},
    ]
