#!/usr/bin/env python3
"""
Renderer adapter.
Turns LaTeX sources into markup nodes, falling back to the original text
when the renderer cannot handle a formula.
"""
import sys
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup, NavigableString
from bs4.element import PageElement
from latex2mathml.converter import convert as latex2mathml_convert

from .config import ENVIRONMENT_START, RenderConfig, Style

RenderFn = Callable[[str, Style], str]


class RenderError(Exception):
    """Raised by the bundled renderer when a formula cannot be converted."""


@dataclass
class RenderStats:
    rendered: int = 0
    failed: int = 0

    def add(self, other: "RenderStats") -> None:
        self.rendered += other.rendered
        self.failed += other.failed


def latex_to_markup(source: str, style: Style = Style.DISPLAY) -> str:
    """Convert a LaTeX string to MathML markup."""
    display = "block" if style == Style.DISPLAY else "inline"
    try:
        return latex2mathml_convert(source, display=display)
    except Exception as e:
        raise RenderError(f"latex2mathml failed on {source!r}: {e}") from e


def markup_to_node(markup: str) -> PageElement:
    """Wrap rendered markup in a <span> element."""
    fragment = BeautifulSoup(markup, 'html.parser')
    span = fragment.new_tag('span')
    for child in list(fragment.contents):
        span.append(child.extract())
    return span


def render_segment(source: str, raw: str, style: Style, render_fn: RenderFn,
                   stats: RenderStats) -> PageElement:
    """
    Render one formula.

    If render_fn raises, a warning is printed and the raw text (delimiters
    included) is returned as a plain text node so nothing is lost.
    """
    try:
        node = markup_to_node(render_fn(source, style))
    except Exception as e:
        print(f"    [MathWarn] Could not parse '{source}' with {e}", file=sys.stderr)
        stats.failed += 1
        return NavigableString(raw)
    stats.rendered += 1
    return node


def is_environment(text: str, config: RenderConfig) -> bool:
    """True when the whole run is a `\\begin{...}` environment to render as display math."""
    return config.process_environments and bool(ENVIRONMENT_START.match(text))


def render_environment(text: str, render_fn: RenderFn, stats: RenderStats) -> PageElement:
    return render_segment(text, text, Style.DISPLAY, render_fn, stats)
