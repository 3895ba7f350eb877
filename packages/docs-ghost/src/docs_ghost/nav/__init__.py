"""MkDocs navigation: the nav tree model, its loader, and page collection."""

from .loader import decode_nav, load_nav
from .model import IncludedNav, NavItem, NavTree, Page, PlainPath, Section, parse_include_target
from .pages import collect_pages, include_roots, missing_files

__all__ = [
    "IncludedNav",
    "NavItem",
    "NavTree",
    "Page",
    "PlainPath",
    "Section",
    "collect_pages",
    "decode_nav",
    "include_roots",
    "load_nav",
    "missing_files",
    "parse_include_target",
]
