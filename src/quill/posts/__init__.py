"""Post publishing, querying and ownership rules."""

from .schemas import Page, PostContent, PostFilter, PostLookup, PublishDraft, parse_input
from .service import PostService

__all__ = [
    "Page",
    "PostContent",
    "PostFilter",
    "PostLookup",
    "PostService",
    "PublishDraft",
    "parse_input",
]
