"""Unit tests for core/sanitize.py"""

import pytest

from mdpreview.core.sanitize import sanitize_html


@pytest.mark.parametrize("html,forbidden", [
    ("<p>a</p><script>alert(1)</script>", "<script"),
    ('<img src="x.png" onerror="alert(1)">', "onerror"),
    ('<a href="javascript:alert(1)">x</a>', "javascript:"),
    ('<p onclick="steal()">x</p>', "onclick"),
    ('<iframe src="https://evil.example"></iframe>', "<iframe"),
    ("<p>a</p><!-- hidden -->", "<!--"),
])
def test_active_content_is_removed(html, forbidden):
    assert forbidden not in sanitize_html(html)


def test_structure_and_classes_survive():
    html = (
        "<h1>T</h1>\n"
        "<ul>\n<li>one</li>\n</ul>\n"
        '<pre><code class="language-mermaid">graph TD;</code></pre>\n'
        "<table>\n<thead>\n<tr><th>a</th></tr>\n</thead>\n</table>\n"
        "<p>H<sub>2</sub>O x<sup>2</sup></p>\n"
    )
    assert sanitize_html(html) == html


def test_links_keep_safe_href():
    html = '<a href="https://example.com" title="t">x</a>'
    assert sanitize_html(html) == html


def test_footnote_markup_survives():
    html = (
        '<sup class="footnote-ref"><a href="#fn1" id="fnref1">[1]</a></sup>'
        '<section class="footnotes"><ol class="footnotes-list">'
        '<li id="fn1" class="footnote-item"><p>x</p></li></ol></section>'
    )
    assert sanitize_html(html) == html


def test_mathml_survives():
    out = sanitize_html('<math display="inline"><msup><mi>x</mi><mn>2</mn></msup></math>')
    assert "<msup><mi>x</mi><mn>2</mn></msup>" in out


def test_sanitize_is_idempotent():
    once = sanitize_html('<p onclick="x()">a <script>b</script> <a href="javascript:c">d</a></p>')
    assert sanitize_html(once) == once
