#!/usr/bin/env python3
"""
Math delimiter scanning.
Splits a text run into literal text and LaTeX math segments.
"""
from dataclasses import dataclass
from typing import Iterable, List, Union

from .config import RenderConfig, Style


@dataclass(frozen=True)
class TextSegment:
    raw: str


@dataclass(frozen=True)
class MathSegment:
    source: str
    raw: str
    style: Style


Segment = Union[TextSegment, MathSegment]


def find_end_of_math(delimiter: str, text: str, start_index: int) -> int:
    """
    Return the index of the closing delimiter, or -1 if there is none.

    A match only counts outside of brace groups. A backslash skips the
    following character, so escaped braces or delimiter-like sequences
    never close the region or change the brace level.
    """
    index = start_index
    brace_level = 0
    delim_length = len(delimiter)

    while index < len(text):
        character = text[index]

        if brace_level <= 0 and text[index:index + delim_length] == delimiter:
            return index
        elif character == '\\':
            index += 1
        elif character == '{':
            brace_level += 1
        elif character == '}':
            brace_level -= 1

        index += 1

    return -1


def split_at_delimiters(segments: Iterable[Segment], left_delim: str, right_delim: str,
                        style: Style) -> List[Segment]:
    """Split every text segment at one delimiter pair. Math segments pass through."""
    final = []

    for segment in segments:
        if not isinstance(segment, TextSegment):
            final.append(segment)
            continue

        text = segment.raw
        looking_for_left = True
        curr_index = 0

        next_index = text.find(left_delim)
        if next_index != -1:
            curr_index = next_index
            final.append(TextSegment(text[:curr_index]))
            looking_for_left = False

        while True:
            if looking_for_left:
                next_index = text.find(left_delim, curr_index)
                if next_index == -1:
                    break
                final.append(TextSegment(text[curr_index:next_index]))
                curr_index = next_index
            else:
                next_index = find_end_of_math(right_delim, text, curr_index + len(left_delim))
                if next_index == -1:
                    break
                final.append(MathSegment(
                    source=text[curr_index + len(left_delim):next_index],
                    raw=text[curr_index:next_index + len(right_delim)],
                    style=style,
                ))
                curr_index = next_index + len(right_delim)

            looking_for_left = not looking_for_left

        # Whatever is left, including an unmatched left delimiter, stays text
        final.append(TextSegment(text[curr_index:]))

    return final


def split_with_delimiters(text: str, delimiters) -> List[Segment]:
    """
    Split text at every configured delimiter pair.

    `delimiters` is either a RenderConfig or a mapping with 'inline' and
    'display' lists of (left, right) pairs. Inline pairs are applied first,
    then display pairs, each group in list order.
    """
    if isinstance(delimiters, RenderConfig):
        passes = list(delimiters.delimiter_passes())
    else:
        passes = [(l, r, Style.INLINE) for l, r in delimiters.get('inline', ())]
        passes += [(l, r, Style.DISPLAY) for l, r in delimiters.get('display', ())]

    data: List[Segment] = [TextSegment(text)]
    for left, right, style in passes:
        data = split_at_delimiters(data, left, right, style)
    return data


def join_segments(segments: Iterable[Segment]) -> str:
    """Rebuild the original text from its segments."""
    return "".join(s.raw for s in segments)
