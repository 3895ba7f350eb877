"""Link extraction, normalisation, URL maps and the resolver cascade."""

from .extract import extract_css_image_refs, extract_image_refs, extract_links, has_footnotes
from .maps import LinkMaps, build_link_maps, slugify
from .normalize import normalise_link, normalise_links
from .resolver import STRATEGIES, ResolveContext, analyse_links, resolve

__all__ = [
    "LinkMaps",
    "ResolveContext",
    "STRATEGIES",
    "analyse_links",
    "build_link_maps",
    "extract_css_image_refs",
    "extract_image_refs",
    "extract_links",
    "has_footnotes",
    "normalise_link",
    "normalise_links",
    "resolve",
    "slugify",
]
