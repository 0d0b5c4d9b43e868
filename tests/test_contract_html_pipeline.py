from __future__ import annotations

import unittest

from cordova_inject.model import Document, InjectionFragmentSet
from cordova_inject.pipeline import (
    CORDOVA_SCRIPT_TAG,
    CSP_MARKER,
    SCRIPT_MARKER,
    Substitution,
    build_steps,
    transform_document,
    transform_html,
)

FRAGS = InjectionFragmentSet(head_start="A", head_end="B", body_start="C", body_end="D")
CSP_META = '<meta http-equiv="Content-Security-Policy" content="default-src \'self\'">'


def run(html: str) -> str:
    return transform_html(html, build_steps(FRAGS, CSP_META))


class TestHtmlPipelineContract(unittest.TestCase):
    def test_fragments_land_at_anchor_points(self) -> None:
        self.assertEqual(
            run("<html><head></head><body></body></html>"),
            "<html><head>AB</head><body>CD</body></html>",
        )

    def test_only_first_anchor_is_touched(self) -> None:
        out = run("<head></head><head></head><body></body><body></body>")
        self.assertEqual(out, "<head>AB</head><head></head><body>CD</body><body></body>")

    def test_missing_anchors_are_noops(self) -> None:
        self.assertEqual(run("<p>fragment only</p>"), "<p>fragment only</p>")
        self.assertEqual(run("<head></head><p>x</p>"), "<head>AB</head><p>x</p>")

    def test_base_tag_is_removed(self) -> None:
        for tag in ('<base href="foo/">', '<base  href="/" >', "<BASE href='/app/'/>", '<base target="_self" href="./">'):
            with self.subTest(tag=tag):
                out = run(f"<html><head>{tag}<title>t</title></head></html>")
                self.assertNotIn("<base", out.lower())
                self.assertIn("<title>t</title>", out)

        # Look-alikes ahead of the real tag must not be taken for it.
        for decoy in ('<base data-href="x">', '<base-widget href="/x"></base-widget>'):
            with self.subTest(decoy=decoy):
                out = run(f'<head>{decoy}<base href="/"></head>')
                self.assertEqual(out, f"<head>A{decoy}B</head>")
                self.assertNotIn('<base href="/">', out)

    def test_base_without_href_is_kept(self) -> None:
        out = run('<head><base target="_blank"></head>')
        self.assertIn('<base target="_blank">', out)

    def test_only_first_base_tag_is_removed(self) -> None:
        out = run('<base href="a/"><base href="b/">')
        self.assertEqual(out, '<base href="b/">')

    def test_script_marker_replaced_once(self) -> None:
        html = f"<!-- build:js --><head>{SCRIPT_MARKER}<!-- other --></head>{SCRIPT_MARKER}"
        out = run(html)
        self.assertEqual(out.count(CORDOVA_SCRIPT_TAG), 1)
        self.assertEqual(out.count(SCRIPT_MARKER), 1)
        self.assertIn("<!-- build:js -->", out)
        self.assertIn("<!-- other -->", out)

    def test_csp_marker_replaced_with_meta(self) -> None:
        out = run(f"<head>{CSP_MARKER}</head>")
        self.assertEqual(out, f"<head>A{CSP_META}B</head>")

    def test_fragment_with_backslashes_is_spliced_literally(self) -> None:
        frags = InjectionFragmentSet(head_start=r"\1 $& \g<0>", head_end="", body_start="", body_end="")
        out = transform_html("<head></head>", build_steps(frags, CSP_META))
        self.assertEqual(out, r"<head>\1 $& \g<0></head>")

    def test_steps_run_in_order(self) -> None:
        labels = [s.label for s in build_steps(FRAGS, CSP_META)]
        self.assertEqual(
            labels,
            ["head-start", "head-end", "body-start", "body-end", "base-href", "cordova-script", "cordova-csp"],
        )

    def test_substitution_literal_and_regex(self) -> None:
        import re

        self.assertEqual(Substitution("x", "a", "b").apply("aaa"), "baa")
        self.assertEqual(Substitution("x", re.compile(r"\d+"), "#").apply("a12b34"), "a#b34")
        self.assertEqual(Substitution("x", "zz", "b").apply("aaa"), "aaa")

    def test_document_keeps_path_and_survives_odd_bytes(self) -> None:
        doc = Document("www/index.html", b"<head></head>\xff")
        out = transform_document(doc, build_steps(FRAGS, CSP_META))
        self.assertEqual(out.path, "www/index.html")
        self.assertEqual(out.contents, b"<head>AB</head>\xff")

    def test_unchanged_document_is_returned_as_is(self) -> None:
        doc = Document("a.html", b"<p>nothing to do</p>")
        self.assertIs(transform_document(doc, build_steps(FRAGS, CSP_META)), doc)


if __name__ == "__main__":
    unittest.main(verbosity=2)
