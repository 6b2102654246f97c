#!/usr/bin/env python3
"""
Math Auto-Render Package
========================

This package finds LaTeX math in the text of HTML documents and replaces it
with rendered markup, leaving code blocks, scripts and other skipped elements
untouched.

Modules:
    - config: Default options and the validated RenderConfig
    - delimiters: Brace-aware delimiter matching and text segmentation
    - renderer: Renderer adapter with failure fallback, default MathML renderer
    - core: Tree walker and public entry points
    - utils: Input discovery and output validation for the CLI

Usage:
    from bs4 import BeautifulSoup
    from math_autorender import render_math_in_element

    soup = BeautifulSoup(html, "html.parser")
    render_math_in_element(soup.body, {"ignore_class": "no-math"}, my_renderer)

    # Or from the command line:
    python run_auto_render.py site/ --output-dir rendered/
"""

__version__ = "1.0.0"

import sys
from pathlib import Path
from typing import Iterable, Mapping, Optional


def run(paths: Iterable[Path], output_dir: Optional[Path] = None,
        options: Optional[Mapping] = None, dry_run: bool = False):
    """
    Render math in every HTML file under `paths`.

    Args:
        paths: HTML files and/or directories (searched recursively).
        output_dir: Where to write results, mirroring relative paths.
                    Files are rewritten in place when omitted.
        options: Render option overrides (see config.build_config).
        dry_run: Only report what would be rendered.

    Returns:
        (files_processed, RenderStats) totals for the run.
    """
    from tqdm import tqdm

    from .config import build_config
    from .core import render_math_in_html
    from .renderer import RenderStats
    from .utils import discover_html_files, output_path_for, validate_output_safety

    # Validate once, before touching any file
    config = build_config(options)

    files = discover_html_files(paths)
    total = RenderStats()
    written = 0

    for html_file, base_dir in tqdm(files, desc="Rendering math", unit="file"):
        original = html_file.read_text(encoding='utf-8', errors='replace')
        rendered, stats = render_math_in_html(original, config)
        total.add(stats)

        if not stats.rendered and not stats.failed:
            continue

        tqdm.write(f"  {html_file}: {stats.rendered} rendered, {stats.failed} failed")
        # Nothing rendered means nothing to write; leave the file byte-identical
        if dry_run or not stats.rendered:
            continue

        is_safe, error = validate_output_safety(original, rendered, html_file.name)
        if not is_safe:
            tqdm.write(f"    [Skip] {error}", file=sys.stderr)
            continue

        target = output_path_for(html_file, base_dir, output_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding='utf-8')
        written += 1

    print(f"--> {len(files)} files scanned, {written} written, "
          f"{total.rendered} formulas rendered, {total.failed} failed")
    return len(files), total


def run_with_args(argv=None) -> int:
    """
    Run auto-rendering with command-line arguments.
    This is the CLI entry point.
    """
    import argparse

    from .config import ConfigurationError, IGNORE_CLASS, PROCESS_CLASS, SKIP_TAGS

    parser = argparse.ArgumentParser(
        description="Render LaTeX math found in HTML files as MathML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_auto_render.py page.html                  # Rewrite in place
    python run_auto_render.py site/ --output-dir out/    # Mirror into out/
    python run_auto_render.py site/ --dry-run            # Only count formulas
        """
    )
    parser.add_argument("paths", nargs="+", type=Path, help="HTML files or directories")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Write rendered files here instead of in place")
    parser.add_argument("--skip-tags", default=",".join(SKIP_TAGS),
                        help="Comma-separated tags whose content is never scanned")
    parser.add_argument("--ignore-class", default=IGNORE_CLASS,
                        help="Regex of class names whose content is not scanned")
    parser.add_argument("--process-class", default=PROCESS_CLASS,
                        help="Regex of class names whose content is always scanned")
    parser.add_argument("--no-environments", action="store_true",
                        help="Do not render text starting with \\begin as display math")
    parser.add_argument("--dry-run", action="store_true",
                        help="Report counts without writing files")

    args = parser.parse_args(argv)

    options = {
        'skip_tags': [t.strip() for t in args.skip_tags.split(",") if t.strip()],
        'ignore_class': args.ignore_class,
        'process_class': args.process_class,
        'process_environments': not args.no_environments,
    }

    try:
        scanned, _ = run(args.paths, args.output_dir, options, args.dry_run)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 3

    if not scanned:
        print("ERROR: No HTML files found", file=sys.stderr)
        return 2
    return 0


# Export key functions and classes for direct imports
from .config import (
    ConfigurationError,
    RenderConfig,
    Style,
    build_config,
)

from .delimiters import (
    MathSegment,
    TextSegment,
    find_end_of_math,
    split_at_delimiters,
    split_with_delimiters,
)

from .renderer import (
    RenderError,
    RenderStats,
    latex_to_markup,
)

from .core import (
    render_math_in_document,
    render_math_in_element,
    render_math_in_html,
    scan_element,
    scan_text,
)


__all__ = [
    # Main entry points
    'run',
    'run_with_args',
    'render_math_in_element',
    'render_math_in_document',
    'render_math_in_html',
    # Config
    'ConfigurationError',
    'RenderConfig',
    'Style',
    'build_config',
    # Delimiters
    'MathSegment',
    'TextSegment',
    'find_end_of_math',
    'split_at_delimiters',
    'split_with_delimiters',
    # Renderer
    'RenderError',
    'RenderStats',
    'latex_to_markup',
    # Walker
    'scan_element',
    'scan_text',
]
