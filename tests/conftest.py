import os
import sys

import pytest
from bs4 import BeautifulSoup

# Make the package importable without installing it
_scripts_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts")
if _scripts_dir not in sys.path:
    sys.path.insert(0, _scripts_dir)


class FakeRenderer:
    """Records calls and returns a predictable <m> element."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def __call__(self, source, style):
        self.calls.append((source, style))
        if source.strip() in self.fail_on:
            raise ValueError(f"cannot render {source!r}")
        return f'<m data-style="{style.value}">{source.strip()}</m>'


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def failing_renderer():
    def factory(*sources):
        return FakeRenderer(fail_on=sources)
    return factory


@pytest.fixture
def soup_of():
    def parse(html):
        return BeautifulSoup(html, "html.parser")
    return parse


@pytest.fixture
def html_dir(tmp_path):
    # Small site with math in nested pages
    root = tmp_path / "site"
    (root / "chapters").mkdir(parents=True)
    (root / "index.html").write_text(
        "<html><body><p>Euler: \\(e^{i\\pi}+1=0\\)</p></body></html>", encoding="utf-8"
    )
    (root / "chapters" / "one.html").write_text(
        "<html><body><p>$$x^2$$</p><pre>$$raw$$</pre></body></html>", encoding="utf-8"
    )
    (root / "chapters" / "plain.html").write_text(
        "<html><body><p>No math here.</p></body></html>", encoding="utf-8"
    )
    (root / "notes.txt").write_text("$$not html$$", encoding="utf-8")
    return root
