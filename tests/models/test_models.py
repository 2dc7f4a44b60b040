"""Tests for catalog_reconciler/models/product.py"""

from catalog_reconciler.models import (
    DuplicateGroup,
    HashEntry,
    ImageChange,
    JobResult,
    ProductRecord,
    UrlCheckResult,
)


class TestProductRecord:
    def test_from_dict(self):
        p = ProductRecord.from_dict({"id": "p001", "name": "Shampoo", "brand": "B",
                                     "category": "hair", "image_url": "/images/products/p001.jpg"})
        assert p.id == "p001"
        assert p.image_url == "/images/products/p001.jpg"

    def test_missing_fields_default_empty(self):
        p = ProductRecord.from_dict({"id": "p001"})
        assert p.image_url is None
        assert p.name == ""
        assert p.brand == ""
        assert p.category == ""

    def test_non_string_image_url_ignored(self):
        assert ProductRecord.from_dict({"id": "p1", "image_url": 42}).image_url is None

    def test_search_query_skips_empty_parts(self):
        p = ProductRecord.from_dict({"id": "p1", "name": "Mask", "brand": None, "category": "hair"})
        assert p.search_query == "Mask hair"

    def test_search_query_empty(self):
        assert ProductRecord.from_dict({"id": "p1"}).search_query == ""

    def test_has_remote_image(self):
        assert ProductRecord.from_dict({"image_url": "https://x/y.jpg"}).has_remote_image
        assert ProductRecord.from_dict({"image_url": "http://x/y.jpg"}).has_remote_image
        assert not ProductRecord.from_dict({"image_url": "/images/products/a.jpg"}).has_remote_image
        assert not ProductRecord.from_dict({}).has_remote_image


class TestUrlCheckResult:
    def test_ok_dict(self):
        assert UrlCheckResult(ok=True, status=200).to_dict() == {"ok": True, "status": 200}

    def test_error_dict_has_no_status(self):
        assert UrlCheckResult(ok=False, error="boom").to_dict() == {"ok": False, "error": "boom"}


class TestOtherModels:
    def test_image_change_dict(self):
        change = ImageChange(id="p1", old_url=None, new_url="/images/products/p1.jpg")
        assert change.to_dict() == {"id": "p1", "from": None, "to": "/images/products/p1.jpg"}

    def test_duplicate_group_ids(self):
        a = HashEntry(id="p1", title=None, image="a.jpg", path="/a", exists=True, sha256="h")
        b = HashEntry(id="p2", title=None, image="b.jpg", path="/b", exists=True, sha256="h")
        assert DuplicateGroup(sha256="h", entries=[a, b]).ids == ["p1", "p2"]

    def test_job_result_defaults(self):
        result = JobResult(job="fix-local")
        assert result.changed == 0
        assert result.exit_code == 0
        assert result.wrote_catalog is False

    def test_job_result_failure_exit_code(self):
        assert JobResult(job="x", success=False).exit_code == 1


class TestNonStringFields:
    def test_numeric_brand_joins_query(self):
        product = ProductRecord.from_dict({"id": "p1", "name": "Shampoo", "brand": 42})
        assert product.brand == "42"
        assert product.search_query == "Shampoo 42"

    def test_numeric_id_and_category(self):
        product = ProductRecord.from_dict({"id": 7, "name": "Mask", "category": 3.5})
        assert product.id == "7"
        assert product.search_query == "Mask 3.5"

    def test_null_and_zero_fields_are_empty(self):
        product = ProductRecord.from_dict({"id": "p1", "name": None, "brand": 0, "category": False})
        assert product.search_query == ""
