# tests/test_page_mummifier.py
"""
Tests for XhtmlPageMummifier.

Verifies:
1. Title and meta elements become description properties
2. Relative references are relocated, everything else left alone
3. Pages are written as XHTML with an XML declaration
4. Malformed pages fail their artifact
"""

from pathlib import Path

import pytest
from lxml import etree

from mummy.artifact.vocab import (
    PROPERTY_TAG_COPYRIGHT,
    PROPERTY_TAG_CREATOR,
    PROPERTY_TAG_DESCRIPTION,
    PROPERTY_TAG_TITLE,
)
from mummy.engine import MummyEngine
from mummy.mummify.directory import plan
from mummy.mummify.page import (
    DocumentLoader,
    ReferenceRelocator,
    XhtmlPageMummifier,
    relocate_reference,
)

PAGE = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
  <head>
    <title>Gate and Turret</title>
    <meta name="description" content="A castle gate"/>
    <meta name="author" content="Jane Doe"/>
    <meta name="copyright" content="(c) Jane Doe"/>
    <meta name="description" content="ignored, first wins"/>
    <link rel="stylesheet" href="../style.css"/>
  </head>
  <body>
    <a href="photos/gate.png#top">Gate</a>
    <a href="https://example.com/">Elsewhere</a>
    <a href="#section">Section</a>
    <a href="mailto:jane@example.com">Mail</a>
    <img src="/images/root.png"/>
  </body>
</html>
"""

SOURCE = Path("/site/src")
TARGET = Path("/site/out")


def _rebase(path):
    return TARGET / path.relative_to(SOURCE)


class TestProtocols:
    def test_page_mummifier_capabilities(self):
        mummifier = XhtmlPageMummifier()
        assert isinstance(mummifier, DocumentLoader)
        assert isinstance(mummifier, ReferenceRelocator)
        assert mummifier.supported_extensions == {"xhtml", "html"}


class TestRelocateReference:
    def test_mirrored_tree_keeps_reference(self):
        result = relocate_reference(
            "photos/gate.png", SOURCE / "blog" / "index.xhtml", TARGET / "blog" / "index.xhtml", _rebase
        )
        assert result == "photos/gate.png"

    def test_renamed_referent_is_rewritten(self):
        result = relocate_reference(
            "photos/gate.png?size=1#top",
            SOURCE / "index.xhtml",
            TARGET / "index.xhtml",
            lambda path: TARGET / "photos" / "gate-large.png",
        )
        assert result == "photos/gate-large.png?size=1#top"

    def test_moved_referrer_walks_up(self):
        result = relocate_reference(
            "style.css", SOURCE / "index.xhtml", TARGET / "deep" / "index.xhtml", _rebase
        )
        assert result == "../style.css"

    @pytest.mark.parametrize(
        "reference",
        ["https://example.com/", "#section", "mailto:jane@example.com", "/images/root.png", "?q=1"],
    )
    def test_non_relative_references_left_alone(self, reference):
        assert relocate_reference(reference, SOURCE / "a.xhtml", TARGET / "b" / "a.xhtml", _rebase) is None

    def test_unmapped_referent_left_alone(self):
        assert relocate_reference("a.png", SOURCE / "a.xhtml", TARGET / "a.xhtml", lambda p: None) is None


class TestPageMummifier:
    def test_metadata_from_head(self, make_context, source_root):
        (source_root / "index.xhtml").write_text(PAGE, encoding="utf-8")

        root = plan(make_context(), source_root)

        description = root.content_artifact.description
        assert description.get(PROPERTY_TAG_TITLE) == "Gate and Turret"
        assert description.get(PROPERTY_TAG_DESCRIPTION) == "A castle gate"
        assert description.get(PROPERTY_TAG_CREATOR) == "Jane Doe"
        assert description.get(PROPERTY_TAG_COPYRIGHT) == "(c) Jane Doe"
        assert description.content_type == "application/xhtml+xml"

    def test_relocate_document_counts_rewrites(self, make_context, source_root, target_root):
        (source_root / "index.xhtml").write_text(PAGE, encoding="utf-8")
        mummifier = XhtmlPageMummifier()
        context = make_context()
        document = mummifier.load_source_document(context, source_root / "index.xhtml")

        rewritten = mummifier.relocate_document(
            context,
            document,
            source_root / "index.xhtml",
            target_root / "index.xhtml",
            lambda path: target_root / "renamed.png" if path.name == "gate.png" else None,
        )

        assert rewritten == 1
        hrefs = document.xpath("//*[local-name()='a']/@href")
        assert hrefs[0] == "renamed.png#top"
        assert "https://example.com/" in hrefs

    def test_writes_xhtml(self, source_root, target_root):
        (source_root / "index.xhtml").write_text(PAGE, encoding="utf-8")
        (source_root / "photos").mkdir()

        summary = MummyEngine().run(source_root, target_root)

        assert summary.succeeded
        output = (target_root / "index.xhtml").read_bytes()
        assert output.startswith(b"<?xml")
        tree = etree.fromstring(output)
        assert tree.xpath("//*[local-name()='a']/@href")[0] == "photos/gate.png#top"

    def test_html_page_serialized_as_xml(self, source_root, target_root):
        (source_root / "about.html").write_text(
            "<html><head><title>About</title></head><body><p>Hi<br></p></body></html>",
            encoding="utf-8",
        )

        summary = MummyEngine().run(source_root, target_root)

        assert summary.succeeded
        tree = etree.fromstring((target_root / "about.html").read_bytes())
        assert tree.xpath("//title/text()") == ["About"]

    def test_malformed_page_fails_artifact(self, source_root, target_root):
        (source_root / "broken.xhtml").write_text("<html><body></html>", encoding="utf-8")
        (source_root / "ok.txt").write_text("ok")

        summary = MummyEngine().run(source_root, target_root)

        assert [f.source_path for f in summary.failures] == [source_root / "broken.xhtml"]
        assert (target_root / "ok.txt").is_file()
        assert not (target_root / "broken.xhtml").exists()
