#!/usr/bin/env python3
"""
Utility functions for rendering math in HTML files.
Includes input discovery, output path mapping, and output validation.
"""
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

HTML_SUFFIXES = ('.html', '.htm')


def discover_html_files(paths: Iterable[Path]) -> List[Tuple[Path, Path]]:
    """
    Expand files and directories into (html_file, base_dir) pairs.
    Directories are searched recursively; base_dir is used to mirror
    relative paths into an output directory.
    """
    found = []
    seen = set()
    for p in paths:
        p = Path(p)
        if p.is_dir():
            candidates = [(f, p) for f in sorted(p.rglob("*")) if f.suffix.lower() in HTML_SUFFIXES and f.is_file()]
        elif p.is_file():
            candidates = [(p, p.parent)]
        else:
            print(f"  Warning: {p} not found, skipping")
            continue

        for f, base in candidates:
            key = f.resolve()
            if key in seen:
                continue
            seen.add(key)
            found.append((f, base))
    return found


def output_path_for(html_file: Path, base_dir: Path, output_dir: Optional[Path]) -> Path:
    """Where the rendered version of html_file is written (in place if no output_dir)."""
    if output_dir is None:
        return html_file
    return Path(output_dir) / html_file.relative_to(base_dir)


def validate_output_safety(original: str, rendered: str, filename: str) -> tuple:
    """
    Validates that rendered HTML is safe to write (not empty/corrupted).
    Returns: (is_safe: bool, error_message: str)
    """
    if original.strip() and not rendered.strip():
        return False, f"Empty content for {filename}"

    if len(rendered) < len(original.strip()) // 2:
        return False, f"Content shrank from {len(original)} to {len(rendered)} chars for {filename}"

    # Structural tags present in the input must survive
    for tag in ('<html', '<body'):
        if tag in original.lower() and tag not in rendered.lower():
            return False, f"Missing {tag}> tag in {filename}"

    return True, ""
