#!/usr/bin/env python3
"""
HTML Math Auto-Renderer
=======================

Finds LaTeX math in the text of HTML files and replaces it with MathML.

Usage:
    python run_auto_render.py page.html                 # Rewrite in place
    python run_auto_render.py site/ --output-dir out/   # Mirror into out/

Features:
    - Inline \\( ... \\) and display $$ ... $$ / \\[ ... \\] delimiters
    - Brace-aware matching, so $$ inside {...} does not end a formula
    - Text starting with \\begin{...} rendered as one display formula
    - <script>, <pre>, <code> and friends left untouched
    - tex2jax_ignore / tex2jax_process classes honoured
    - Formulas that fail to render are kept as written
"""

import sys
import os

# Ensure the scripts directory is in the path
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)


def main(argv=None) -> int:
    """Main entry point for the auto-renderer. Returns the process exit status."""
    from math_autorender import run_with_args
    return run_with_args(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
