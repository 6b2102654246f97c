#!/usr/bin/env python3
"""
Auto-render configuration.
Default options and the per-call RenderConfig built from caller overrides.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Pattern, Tuple


class Style(str, Enum):
    """TeX math style used to typeset a formula."""
    INLINE = "textstyle"
    DISPLAY = "displaystyle"


class ConfigurationError(ValueError):
    """Raised when render options cannot be turned into a RenderConfig."""


# --- DEFAULTS ---
# Tags whose content is never scanned for math delimiters
SKIP_TAGS = (
    'script', 'noscript', 'style', 'textarea', 'pre', 'code',
    'annotation', 'annotation-xml',
)

# Regex for class names of elements whose contents should not be processed
IGNORE_CLASS = "tex2jax_ignore"

# Regex for class names of elements whose contents are processed even when
# their tag name or ignore class would have prevented it
PROCESS_CLASS = "tex2jax_process"

PROCESS_ENVIRONMENTS = True

INLINE_DELIMITERS = (('\\(', '\\)'),)
DISPLAY_DELIMITERS = (('$$', '$$'), ('\\[', '\\]'))

# Marker that makes a whole text run one display formula
ENVIRONMENT_START = re.compile(r'^\s*\\begin')

OPTION_KEYS = frozenset({
    'skip_tags', 'ignore_class', 'process_class',
    'process_environments', 'delimiters', 'disabled',
})

DelimiterPair = Tuple[str, str]


@dataclass(frozen=True)
class RenderConfig:
    skip_tags: frozenset
    ignore_class_pattern: Pattern
    process_class_pattern: Pattern
    process_environments: bool = PROCESS_ENVIRONMENTS
    inline_delimiters: Tuple[DelimiterPair, ...] = INLINE_DELIMITERS
    display_delimiters: Tuple[DelimiterPair, ...] = DISPLAY_DELIMITERS
    disabled: bool = False

    def delimiter_passes(self):
        """Yield (left, right, style) in scan order: inline first, then display."""
        for left, right in self.inline_delimiters:
            yield left, right, Style.INLINE
        for left, right in self.display_delimiters:
            yield left, right, Style.DISPLAY


def _compile(pattern, name: str) -> Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise ConfigurationError(f"{name} must be a regular expression string, got {pattern!r}")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {name} pattern {pattern!r}: {e}") from e


def _delimiter_pairs(pairs, group: str) -> Tuple[DelimiterPair, ...]:
    if isinstance(pairs, str):
        raise ConfigurationError(f"delimiters.{group} must be a list of (left, right) pairs")
    result = []
    try:
        items = list(pairs)
    except TypeError:
        raise ConfigurationError(f"delimiters.{group} must be a list of (left, right) pairs") from None
    for pair in items:
        if isinstance(pair, str) or not hasattr(pair, '__len__') or len(pair) != 2:
            raise ConfigurationError(f"Malformed delimiter pair in delimiters.{group}: {pair!r}")
        left, right = pair
        if not isinstance(left, str) or not isinstance(right, str) or not left or not right:
            raise ConfigurationError(f"Delimiters must be non-empty strings: {pair!r}")
        result.append((left, right))
    return tuple(result)


def _flag(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be True or False, got {value!r}")
    return value


def _skip_tags(tags) -> frozenset:
    if isinstance(tags, str):
        raise ConfigurationError("skip_tags must be a list of tag names, not a string")
    try:
        names = list(tags)
    except TypeError:
        raise ConfigurationError(f"skip_tags must be a list of tag names, got {tags!r}") from None
    if not all(isinstance(t, str) for t in names):
        raise ConfigurationError(f"skip_tags must only contain strings: {names!r}")
    return frozenset(t.lower() for t in names)


def build_config(options: Optional[Mapping] = None) -> RenderConfig:
    """
    Merge caller overrides onto the defaults and validate them.

    Raises ConfigurationError for unknown keys, malformed patterns and
    empty or malformed delimiter pairs, before any traversal starts.
    """
    if isinstance(options, RenderConfig):
        return options
    options = dict(options or {})

    unknown = set(options) - OPTION_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown render option(s): {', '.join(sorted(unknown))}")

    delimiters = options.get('delimiters', {})
    if not isinstance(delimiters, Mapping):
        raise ConfigurationError("delimiters must be a mapping with 'inline' and/or 'display' lists")
    extra = set(delimiters) - {'inline', 'display'}
    if extra:
        raise ConfigurationError(f"Unknown delimiter group(s): {', '.join(sorted(extra))}")

    return RenderConfig(
        skip_tags=_skip_tags(options.get('skip_tags', SKIP_TAGS)),
        ignore_class_pattern=_compile(options.get('ignore_class', IGNORE_CLASS), 'ignore_class'),
        process_class_pattern=_compile(options.get('process_class', PROCESS_CLASS), 'process_class'),
        process_environments=_flag(options.get('process_environments', PROCESS_ENVIRONMENTS),
                                   'process_environments'),
        inline_delimiters=_delimiter_pairs(delimiters.get('inline', INLINE_DELIMITERS), 'inline'),
        display_delimiters=_delimiter_pairs(delimiters.get('display', DISPLAY_DELIMITERS), 'display'),
        disabled=_flag(options.get('disabled', False), 'disabled'),
    )
