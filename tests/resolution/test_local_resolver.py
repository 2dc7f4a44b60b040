"""Tests for catalog_reconciler/resolution/local_resolver.py"""

import pytest

from catalog_reconciler.resolution.local_resolver import (
    LowercaseIdResolver,
    NumericSuffixResolver,
    list_image_files,
    numeric_suffix,
)


class TestNumericSuffix:
    @pytest.mark.parametrize("product_id,expected", [
        ("p007", "007"),
        ("p7", "007"),
        ("p070", "070"),
        ("p1234", "1234"),
        ("p000", "000"),
        ("p0a7", "007"),
        ("42", "042"),
    ])
    def test_suffix(self, product_id, expected):
        assert numeric_suffix(product_id) == expected


class TestListImageFiles:
    def test_lists_regular_files_sorted(self, images_dir, add_image):
        add_image("b.jpg")
        add_image("a.png")
        (images_dir / "sub").mkdir()
        (images_dir / "sub" / "p001.jpg").write_bytes(b"x")
        assert list_image_files(images_dir) == ["a.png", "b.jpg"]

    def test_missing_directory_is_empty(self, tmp_path):
        assert list_image_files(tmp_path / "missing") == []


class TestNumericSuffixResolver:
    def test_exact_match(self, images_dir, add_image):
        add_image("p007.png")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "p007.png"

    def test_no_match(self, images_dir, add_image):
        add_image("p008.png")
        assert NumericSuffixResolver(images_dir).resolve("p007") is None

    def test_extension_order(self, images_dir, add_image):
        add_image("p007.jpeg")
        add_image("p007.webp")
        add_image("p007.png")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "p007.png"

    def test_exact_beats_user_pin(self, images_dir, add_image):
        add_image("pp_user_pin007.jpg")
        add_image("p007.jpeg")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "p007.jpeg"

    def test_user_pin_beats_pin_prefixed(self, images_dir, add_image):
        add_image("pp_pin_p007_abc.jpg")
        add_image("pp_user_pin007.png")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "pp_user_pin007.png"

    def test_user_pin_webp_not_accepted(self, images_dir, add_image):
        add_image("pp_user_pin007.webp")
        assert NumericSuffixResolver(images_dir).resolve("p007") is None

    def test_pin_prefixed_beats_double_p(self, images_dir, add_image):
        add_image("pp007.jpg")
        add_image("pp_pin_p007_1.jpg")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "pp_pin_p007_1.jpg"

    def test_pin_prefixed_uses_raw_id(self, images_dir, add_image):
        add_image("pp_pin_p7_1.jpg")
        assert NumericSuffixResolver(images_dir).resolve("p007") is None

    def test_double_p_beats_triple_p(self, images_dir, add_image):
        add_image("ppp_p007_x.jpg")
        add_image("pp007.webp")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "pp007.webp"

    def test_triple_p_containing_id(self, images_dir, add_image):
        add_image("pppp-remap-p007.jpg")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "pppp-remap-p007.jpg"

    def test_triple_p_requires_prefix(self, images_dir, add_image):
        add_image("remap-p007.jpg")
        assert NumericSuffixResolver(images_dir).resolve("p007") is None

    def test_directory_with_matching_name_ignored(self, images_dir, add_image):
        (images_dir / "p007.jpg").mkdir()
        add_image("pp007.jpg")
        assert NumericSuffixResolver(images_dir).resolve("p007") == "pp007.jpg"

    def test_uses_supplied_listing(self, images_dir):
        resolver = NumericSuffixResolver(images_dir)
        assert resolver.resolve("p007", listing=["p007.jpg"]) == "p007.jpg"

    def test_empty_id(self, images_dir):
        assert NumericSuffixResolver(images_dir).resolve("") is None


class TestLowercaseIdResolver:
    def test_lowercases_id(self, images_dir, add_image):
        add_image("p007.jpg")
        assert LowercaseIdResolver(images_dir).resolve("P007") == "p007.jpg"

    def test_extension_order(self, images_dir, add_image):
        add_image("p007.jpeg")
        add_image("p007.png")
        assert LowercaseIdResolver(images_dir).resolve("p007") == "p007.png"

    def test_no_numeric_derivation(self, images_dir, add_image):
        add_image("p007.jpg")
        assert LowercaseIdResolver(images_dir).resolve("p7") is None

    def test_webp_not_accepted(self, images_dir, add_image):
        add_image("p007.webp")
        assert LowercaseIdResolver(images_dir).resolve("p007") is None

    def test_other_conventions_ignored(self, images_dir, add_image):
        add_image("pp_user_pin007.jpg")
        add_image("pp007.jpg")
        assert LowercaseIdResolver(images_dir).resolve("p007") is None
