from .sanitizer import DEFAULT_BLOCKS, BlockMarkers, HtmlSanitizer, strip_html
from .text_cleaner import TagMode, collapse_whitespace, remove_block, remove_tags, replace_tags

__all__ = [
    "BlockMarkers",
    "DEFAULT_BLOCKS",
    "HtmlSanitizer",
    "TagMode",
    "collapse_whitespace",
    "remove_block",
    "remove_tags",
    "replace_tags",
    "strip_html",
]
