"""Tests for slug generation and validation."""

import pytest
from protean.exceptions import ValidationError
from shared.slugs import slugify, validate_slug


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("Wireless Earbuds Pro") == "wireless-earbuds-pro"

    def test_strips_vietnamese_accents(self):
        assert slugify("Điện thoại  Thông minh!") == "dien-thoai-thong-minh"

    def test_collapses_separator_runs(self):
        assert slugify("a -- b __ c") == "a-b-c"

    def test_trims_edge_hyphens(self):
        assert slugify("  -Sale- ") == "sale"

    def test_slug_is_always_valid(self):
        validate_slug(slugify("Áo thun nam (size L) 100% cotton"))


class TestValidateSlug:
    @pytest.mark.parametrize("slug", ["phone", "iphone-15-pro", "a1-b2"])
    def test_accepts_url_safe_slugs(self, slug):
        validate_slug(slug)

    @pytest.mark.parametrize("slug", ["", "Phone", "iphone 15", "iphone_15", "-phone", "phone-", "iphone--15"])
    def test_rejects_invalid_slugs(self, slug):
        with pytest.raises(ValidationError) as exc:
            validate_slug(slug)
        assert "slug" in exc.value.messages
