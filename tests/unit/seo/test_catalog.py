"""Unit tests for the predefined page catalog"""
import pytest
from seopanel.db.enums import PageCategory
from seopanel.seo.catalog import PageCatalog, PredefinedPage, PREDEFINED_PAGES


class TestDefaultCatalog:
    """Tests for the shipped catalog"""

    def test_paths_and_slugs_unique(self, catalog):
        assert len(set(catalog.paths())) == len(catalog)
        assert len(set(catalog.slugs())) == len(catalog)
        assert len(catalog) == len(PREDEFINED_PAGES)

    def test_lookup_by_path(self, catalog):
        about = catalog.get_by_path("/about")
        assert about.default_slug == "about-us"
        assert about.category == PageCategory.ABOUT

    def test_home_page_is_main(self, catalog):
        assert catalog.get_by_path("/").category == PageCategory.MAIN

    def test_unknown_path(self, catalog):
        assert catalog.get_by_path("/not-a-real-page") is None
        assert "/not-a-real-page" not in catalog
        assert "/blog" in catalog

    def test_by_category(self, catalog):
        blog = catalog.by_category("blog")
        assert "/blog" in [page.path for page in blog]
        assert all(page.category == PageCategory.BLOG for page in blog)

    def test_invalid_paths_preserves_order(self, catalog):
        assert catalog.invalid_paths(["/b", "/about", "/a"]) == ["/b", "/a"]

    def test_pages_are_immutable(self, catalog):
        with pytest.raises(AttributeError):
            catalog.get_by_path("/").default_title = "Changed"


class TestPageCatalog:
    """Tests for PageCatalog construction"""

    def test_duplicate_path_rejected(self):
        page = PredefinedPage("/x", "x", PageCategory.OTHER, "X", "X page")
        with pytest.raises(ValueError):
            PageCatalog([page, PredefinedPage("/x", "y", PageCategory.OTHER, "Y", "Y page")])

    def test_duplicate_slug_rejected(self):
        page = PredefinedPage("/x", "x", PageCategory.OTHER, "X", "X page")
        with pytest.raises(ValueError):
            PageCatalog([page, PredefinedPage("/y", "x", PageCategory.OTHER, "Y", "Y page")])
