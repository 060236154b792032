"""Sanitization boundary: strip active content from generated markup"""

import bleach


ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        # text
        "p",
        "br",
        "div",
        "span",
        "section",
        "del",
        "s",
        "ins",
        "mark",
        "sub",
        "sup",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # lists
        "ul",
        "ol",
        "li",
        "hr",
        "dl",
        "dt",
        "dd",
        # code
        "pre",
        "code",
        "kbd",
        "samp",
        # tables
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        "caption",
        # media
        "img",
        # math (MathML)
        "math",
        "semantics",
        "annotation",
        "mrow",
        "mi",
        "mo",
        "mn",
        "ms",
        "msup",
        "msub",
        "msubsup",
        "munder",
        "mover",
        "munderover",
        "mfrac",
        "msqrt",
        "mroot",
        "mtext",
        "mspace",
        "mstyle",
        "mpadded",
        "mphantom",
        "menclose",
        "mtable",
        "mtr",
        "mtd",
    }
)

ALLOWED_ATTRIBUTES = {
    "*": ["class", "id", "title"],
    "a": ["href", "title", "id", "class", "rel"],
    "img": ["src", "alt", "title", "width", "height"],
    "ol": ["start", "class"],
    "th": ["colspan", "rowspan"],
    "td": ["colspan", "rowspan"],
    "math": ["xmlns", "display"],
    "mo": ["stretchy", "fence", "separator", "lspace", "rspace", "largeop", "movablelimits", "form"],
    "mi": ["mathvariant"],
    "mfrac": ["linethickness"],
    "mspace": ["width", "height", "depth"],
    "mstyle": ["displaystyle", "scriptlevel", "mathvariant"],
    "menclose": ["notation"],
    "mtable": ["columnalign", "rowspacing", "columnspacing", "displaystyle"],
    "mtr": ["columnalign"],
    "mtd": ["columnalign", "rowspan", "colspan"],
    "annotation": ["encoding"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})


def sanitize_html(html: str) -> str:
    """Remove scripts, event-handler attributes and dangerous URIs.

    Structural markup (headings, lists, tables, code) and class attributes
    survive so highlighting and diagram discovery still work. Output is a
    fixed point: sanitizing it again yields the same markup.
    """
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
