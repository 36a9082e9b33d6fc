"""
Tests for the link classifier.

Tests asset detection, pagination, followable pages, and the domain gate.
"""

import pytest

from wireframe_reader.crawler import (
    AssetKind,
    ClassifierRules,
    LinkCandidate,
    LinkClassifier,
    LinkKind,
)

ROOT = "https://gytx.dev/wareframes/pog_up_wareframes/"


def anchor(url: str, hint: bool = False) -> LinkCandidate:
    return LinkCandidate(url=url, name="link", navigable=True, pagination_hint=hint)


def image(url: str) -> LinkCandidate:
    return LinkCandidate(url=url, name="img", navigable=False)


@pytest.fixture
def classifier() -> LinkClassifier:
    return LinkClassifier("gytx.dev")


class TestAssets:
    """Asset recognition and kinds."""

    def test_image_link(self, classifier: LinkClassifier):
        """A same-domain .png link is an image asset."""
        candidate = anchor("https://gytx.dev/foo.png")

        assert classifier.classify(candidate, ROOT) is LinkKind.ASSET
        assert classifier.asset_kind(candidate.url) is AssetKind.IMAGE

    def test_pdf_is_document(self, classifier: LinkClassifier):
        url = ROOT + "specs/flow.pdf"

        assert classifier.classify(anchor(url), ROOT) is LinkKind.ASSET
        assert classifier.asset_kind(url) is AssetKind.DOCUMENT

    @pytest.mark.parametrize("ext", [".png", ".jpg", ".jpeg", ".gif", ".svg"])
    def test_image_extensions(self, classifier: LinkClassifier, ext: str):
        assert classifier.asset_kind(f"https://gytx.dev/a/file{ext}") is AssetKind.IMAGE

    def test_keyword_only_is_unknown(self, classifier: LinkClassifier):
        """A keyword in the file name is enough on its own."""
        url = "https://gytx.dev/files/mockup-home"

        assert classifier.classify(anchor(url), ROOT) is LinkKind.ASSET
        assert classifier.asset_kind(url) is AssetKind.UNKNOWN

    def test_keyword_in_directory_is_not_asset(self, classifier: LinkClassifier):
        """Directories named after wireframes are pages, not assets."""
        assert classifier.classify(anchor(ROOT + "page2/"), ROOT) is LinkKind.FOLLOWABLE_PAGE

    def test_keyword_in_web_page_is_not_asset(self, classifier: LinkClassifier):
        assert classifier.classify(anchor("https://gytx.dev/guide.html"), ROOT) is LinkKind.FOLLOWABLE_PAGE

    def test_image_source_asset(self, classifier: LinkClassifier):
        assert classifier.classify(image(ROOT + "img/login.png"), ROOT) is LinkKind.ASSET

    def test_image_source_never_followed(self, classifier: LinkClassifier):
        assert classifier.classify(image("https://gytx.dev/icons/logo.webp"), ROOT) is LinkKind.IGNORE
        assert classifier.classify(image(ROOT + "gallery/"), ROOT) is LinkKind.IGNORE

    def test_subdomain_asset(self, classifier: LinkClassifier):
        assert classifier.classify(anchor("https://cdn.gytx.dev/a.png"), ROOT) is LinkKind.ASSET


class TestDomainGate:
    """Links outside the crawl domain are ignored."""

    def test_external_image_ignored(self, classifier: LinkClassifier):
        candidate = anchor("https://otherhost.com/image.png")
        assert classifier.classify(candidate, ROOT) is LinkKind.IGNORE

    def test_external_page_ignored(self, classifier: LinkClassifier):
        assert classifier.classify(anchor("https://otherhost.com/list/"), ROOT) is LinkKind.IGNORE

    def test_external_pagination_ignored(self, classifier: LinkClassifier):
        candidate = anchor("https://otherhost.com/list/?page=2", hint=True)
        assert classifier.classify(candidate, ROOT) is LinkKind.IGNORE

    def test_non_http_ignored(self, classifier: LinkClassifier):
        assert classifier.classify(anchor("mailto:dev@gytx.dev"), ROOT) is LinkKind.IGNORE
        assert classifier.classify(anchor("ftp://gytx.dev/a.png"), ROOT) is LinkKind.IGNORE


class TestPagination:
    """Pagination needs both a structural hint and a page indicator."""

    def test_query_page(self, classifier: LinkClassifier):
        candidate = anchor(ROOT + "?page=2", hint=True)
        assert classifier.classify(candidate, ROOT) is LinkKind.PAGINATION

    @pytest.mark.parametrize("suffix", ["?p=3", "?offset=20", "page/4", "p/5", "?sort=a&page=2"])
    def test_page_indicators(self, classifier: LinkClassifier, suffix: str):
        candidate = anchor(ROOT + suffix, hint=True)
        assert classifier.classify(candidate, ROOT) is LinkKind.PAGINATION

    def test_without_hint_is_followable(self, classifier: LinkClassifier):
        candidate = anchor(ROOT + "?page=2", hint=False)
        assert classifier.classify(candidate, ROOT) is LinkKind.FOLLOWABLE_PAGE

    def test_hint_without_indicator(self, classifier: LinkClassifier):
        candidate = anchor("https://gytx.dev/archive/next", hint=True)
        assert classifier.classify(candidate, ROOT) is LinkKind.FOLLOWABLE_PAGE

    def test_self_reference_is_not_pagination(self, classifier: LinkClassifier):
        page = ROOT + "?page=2"
        assert not classifier.is_pagination(page, page)
        assert classifier.classify(anchor(page, hint=True), page) is LinkKind.FOLLOWABLE_PAGE


class TestFollowable:
    """Followable page heuristics."""

    @pytest.mark.parametrize("url", [
        ROOT + "page2/",
        "https://gytx.dev/wareframes/list",
        "https://gytx.dev/archive/2024",
        "https://gytx.dev/index.php?id=3",
        "https://gytx.dev/about.htm",
        "https://gytx.dev",
    ])
    def test_followable(self, classifier: LinkClassifier, url: str):
        assert classifier.classify(anchor(url), ROOT) is LinkKind.FOLLOWABLE_PAGE

    @pytest.mark.parametrize("url", [
        "https://gytx.dev/wareframes/archive.zip",
        "https://gytx.dev/notes.txt",
        "https://gytx.dev/report.docx",
        "https://gytx.dev/data.json",
    ])
    def test_not_followable(self, classifier: LinkClassifier, url: str):
        assert classifier.classify(anchor(url), ROOT) is LinkKind.IGNORE

    def test_direct_file_beats_directory_rule(self, classifier: LinkClassifier):
        assert not classifier.is_followable("https://gytx.dev/pog_up_wareframes/files.rar")


class TestRules:
    """Rule tables can be replaced."""

    def test_custom_keywords(self):
        classifier = LinkClassifier("gytx.dev", ClassifierRules(asset_keywords=("sketch",)))

        assert classifier.classify(anchor("https://gytx.dev/files/sketch-01"), ROOT) is LinkKind.ASSET
        assert classifier.classify(anchor("https://gytx.dev/files/mockup-home"), ROOT) is LinkKind.FOLLOWABLE_PAGE

    def test_custom_image_extensions(self):
        rules = ClassifierRules(image_extensions=(".webp",))
        classifier = LinkClassifier("gytx.dev", rules)

        assert classifier.classify(image("https://gytx.dev/icons/logo.webp"), ROOT) is LinkKind.ASSET
        assert classifier.asset_kind("https://gytx.dev/icons/logo.webp") is AssetKind.IMAGE

    def test_every_candidate_gets_one_kind(self, classifier: LinkClassifier):
        urls = [
            "https://gytx.dev/foo.png",
            ROOT + "?page=2",
            ROOT + "page2/",
            "https://otherhost.com/image.png",
            "javascript:void(0)",
            "",
        ]
        for url in urls:
            for candidate in (anchor(url, hint=True), anchor(url), image(url)):
                assert isinstance(classifier.classify(candidate, ROOT), LinkKind)
