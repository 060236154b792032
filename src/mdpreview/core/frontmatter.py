"""Front-matter extraction: split a leading YAML block from the markdown body"""

import logging
import re
from typing import Any

import yaml

from mdpreview.core.models import Extraction
from mdpreview.errors import FrontMatterDecodeError


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n(.*)\Z', re.DOTALL)


def decode_front_matter(block: str) -> Any:
    """Decode a YAML front-matter block; raise FrontMatterDecodeError on malformed input."""
    try:
        return yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise FrontMatterDecodeError(f"Invalid YAML front matter: {e}") from e


def extract_front_matter(text: str) -> Extraction:
    """Return (front_matter, body) for text.

    Without a leading delimited block the body is the input unchanged. When the
    block fails to decode the body is also the full original text, delimiter
    lines included, and front matter is reported absent.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return Extraction(front_matter=None, body=text)
    try:
        front_matter = decode_front_matter(m.group(1))
    except FrontMatterDecodeError as e:
        logger.error("Error parsing YAML front matter: %s", e)
        return Extraction(front_matter=None, body=text)
    return Extraction(front_matter=front_matter, body=m.group(2))
