"""Exception taxonomy for the rendering pipeline"""


class MarkdownPreviewError(Exception):
    """Base class for all mdpreview errors."""


class FrontMatterDecodeError(MarkdownPreviewError):
    """The front-matter block is not valid YAML; recovered by treating it as absent."""


class GrammarParseError(MarkdownPreviewError):
    """Unexpected failure while parsing the body; aborts the whole render."""


class MathTypesettingError(MarkdownPreviewError):
    """A single math expression could not be typeset."""


class DiagramSyntaxError(MarkdownPreviewError):
    """A single diagram block could not be rendered."""


class DocumentFetchError(MarkdownPreviewError):
    """The document server could not be reached or answered with an error."""


class DocumentDecodeError(MarkdownPreviewError):
    """The document server answered with a body that is not {"content": str}."""
