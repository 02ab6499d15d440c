from .checker import check_documents, check_link, find_orphans, resolve_link_path
from .links import extract_links
from .loader import DocumentLoader, parse_document
from .model import AnchorIndex, Document, Finding, Heading, Link, ParseWarning, Severity
from .slugs import AnchorResolver, slugify

__all__ = [
    "AnchorIndex",
    "AnchorResolver",
    "Document",
    "DocumentLoader",
    "Finding",
    "Heading",
    "Link",
    "ParseWarning",
    "Severity",
    "check_documents",
    "check_link",
    "extract_links",
    "find_orphans",
    "parse_document",
    "resolve_link_path",
    "slugify",
]
