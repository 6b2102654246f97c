#!/usr/bin/env python3
"""
Tree walker for math auto-rendering.

Walks a BeautifulSoup tree, splits text nodes at math delimiters and splices
the rendered formulas back in place. Elements are entered according to the
skip-tag / ignore-class / process-class rules of the RenderConfig.
"""
from typing import List, Mapping, Optional, Tuple, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from .config import RenderConfig, build_config
from .delimiters import MathSegment, split_with_delimiters
from .renderer import (
    RenderFn,
    RenderStats,
    is_environment,
    latex_to_markup,
    render_environment,
    render_segment,
)


def scan_text(text: str, config: RenderConfig, render_fn: RenderFn,
              stats: RenderStats) -> Optional[List[PageElement]]:
    """
    Build the replacement nodes for one text run.

    Returns None when the run holds no math and should be left alone.
    """
    # A run starting with \begin is one display formula (MathJax behaviour)
    if is_environment(text, config):
        return [render_environment(text, render_fn, stats)]

    data = split_with_delimiters(text, config)
    if not any(isinstance(s, MathSegment) for s in data):
        return None

    nodes = []
    for segment in data:
        if isinstance(segment, MathSegment):
            nodes.append(render_segment(segment.source, segment.raw, segment.style, render_fn, stats))
        elif segment.raw:
            nodes.append(NavigableString(segment.raw))
    return nodes


def _class_name(elem: Tag) -> str:
    classes = elem.get('class') or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def should_render(elem: Tag, config: RenderConfig) -> bool:
    """Decide whether the walker enters an element."""
    class_name = _class_name(elem)
    # Alternative rule, not used:
    # process_class matches or (tag in skip_tags and not ignore_class matches)
    return bool(
        config.process_class_pattern.search(class_name)
        or not (elem.name.lower() in config.skip_tags
                or config.ignore_class_pattern.search(class_name))
    )


def _is_text(node: PageElement) -> bool:
    # Comments, CDATA, doctypes and the like are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def scan_element(elem: Tag, config: RenderConfig, render_fn: RenderFn,
                 stats: RenderStats) -> None:
    """Render math in the children of elem, recursing into allowed elements."""
    for child in list(elem.contents):
        if _is_text(child):
            nodes = scan_text(str(child), config, render_fn, stats)
            if nodes is not None:
                child.replace_with(*nodes)
        elif isinstance(child, Tag):
            if should_render(child, config):
                scan_element(child, config, render_fn, stats)
        # Otherwise, it's something else, and ignore it.


def _document_root(soup: Optional[BeautifulSoup]) -> Optional[Tag]:
    if soup is None:
        return None
    return soup.body or soup


def render_math_in_element(elem: Union[Tag, str, None], options: Optional[Mapping] = None,
                           render_fn: Optional[RenderFn] = None,
                           soup: Optional[BeautifulSoup] = None) -> RenderStats:
    """
    Render all math found under elem, in place.

    Args:
        elem: The element to scan, the id of an element in `soup`, or None
              for the document body of `soup`. An id that does not resolve
              is a no-op.
        options: Overrides for the default configuration (see config.build_config).
        render_fn: Callable (source, style) -> markup. Defaults to the
                   bundled LaTeX -> MathML renderer.
        soup: The document, needed when elem is an id or None.

    Raises:
        ConfigurationError: if the options are invalid. Nothing is modified.
    """
    config = build_config(options)
    stats = RenderStats()

    if elem is None:
        elem = _document_root(soup)
    elif isinstance(elem, str):
        elem = soup.find(id=elem) if soup is not None else None

    if elem is None or config.disabled:
        return stats

    scan_element(elem, config, render_fn or latex_to_markup, stats)
    return stats


def render_math_in_document(soup: BeautifulSoup, options: Optional[Mapping] = None,
                            render_fn: Optional[RenderFn] = None) -> RenderStats:
    """Render all math in the document body."""
    return render_math_in_element(None, options, render_fn, soup=soup)


def render_math_in_html(html: str, options: Optional[Mapping] = None,
                        render_fn: Optional[RenderFn] = None) -> Tuple[str, RenderStats]:
    """Parse an HTML string, render its math and serialize it again."""
    soup = BeautifulSoup(html, 'html.parser')
    stats = render_math_in_document(soup, options, render_fn)
    return str(soup), stats
