"""Display-tree helpers: the host page, mount targets and text escaping"""

from typing import Optional

from bs4 import BeautifulSoup, Tag


PARSER = "html.parser"

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<article class="markdown-body" id="{target_id}"></article>
</body>
</html>
"""


def make_element(name: str, attrs: Optional[dict[str, str]] = None, text: Optional[str] = None) -> Tag:
    """Create a detached element; text is stored as a text node, never parsed as markup."""
    element = BeautifulSoup("", PARSER).new_tag(name, attrs=attrs or {})
    if text is not None:
        element.string = text
    return element


def escape_html(text: str) -> str:
    """Escape text by assigning it to a text node and reading the markup back."""
    return make_element("div", text=text).decode_contents()


def parse_fragment(markup: str) -> list:
    """Parse markup into a list of detached top-level nodes."""
    fragment = BeautifulSoup(markup, PARSER)
    return [node.extract() for node in list(fragment.contents)]


def set_inner_html(element: Tag, markup: str) -> None:
    """Replace all children of element with the nodes parsed from markup."""
    element.clear()
    for node in parse_fragment(markup):
        element.append(node)


def inner_html(element: Tag) -> str:
    return element.decode_contents()


class Page:
    """A host display tree whose nodes are addressed by id."""

    def __init__(self, markup: str):
        self.soup = BeautifulSoup(markup, PARSER)

    @classmethod
    def blank(cls, target_id: str = "markdown-preview", title: str = "Markdown Preview") -> "Page":
        """Page with a single empty mount target."""
        return cls(PAGE_TEMPLATE.format(title=escape_html(title), target_id=target_id))

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def html(self) -> str:
        return str(self.soup)
