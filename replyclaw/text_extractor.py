"""Plain-text reply extraction.

Each line of the message is tagged with a one-letter marker (see
:class:`~replyclaw.models.Marker`) and the resulting marker string is matched
against a handful of regular expressions to decide which lines belong to the
newest message.

    >>> mark_message_lines(["Hello", "From: foo@bar.com", "", "> Hi"])
    'tsem'
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .link_guard import postprocess, preprocess
from .models import Marker, Resolution, SplitterMatch
from .patterns import (
    RE_DELIMITER,
    RE_EMPTY_QUOTATION,
    RE_FORWARD_BANNER,
    RE_INLINE_REPLY,
    RE_LEADING_FORWARD,
    RE_NOISY_QUOTES,
    RE_PARENTHESIS_LINK,
    RE_QUOTATION,
    RE_QUOTATION_MARKER,
    RE_TRAILING_QUOTATION,
    SPLITTER_MAX_LINES,
    SPLITTER_PATTERNS,
)

log = logging.getLogger(__name__)


def get_delimiter(message: str) -> str:
    """Return the first line break used in *message*, ``"\\n"`` if none."""
    match = RE_DELIMITER.search(message)
    return match.group(0) if match else "\n"


def split_lines(message: str) -> list[str]:
    return RE_DELIMITER.split(message)


# ---------------------------------------------------------------------------
# Splitter matching
# ---------------------------------------------------------------------------

def is_splitter(text: str) -> re.Match | None:
    """Return the match of the first splitter pattern found at the start of
    *text*, or ``None``.
    """
    for pattern in SPLITTER_PATTERNS:
        match = pattern.match(text)
        if match:
            return match
    return None


def find_splitter(lines: list[str], start: int) -> SplitterMatch | None:
    """Look for a splitter header beginning at ``lines[start]``."""
    window = "\n".join(lines[start:start + SPLITTER_MAX_LINES])
    match = is_splitter(window)
    if match is None:
        return None
    return SplitterMatch(start=start, lines=tuple(match.group(0).split("\n")))


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def mark_message_lines(lines: list[str]) -> str:
    """Tag every line with a marker and return the marker string.

    * e - empty line
    * m - line that starts with quotation marker '>'
    * s - splitter line
    * f - forwarded message banner
    * t - presumably a line of the last message in the conversation
    """
    markers: list[str] = []
    i = 0

    while i < len(lines):
        line = lines[i].strip()

        if not line:
            markers.append(Marker.EMPTY.value)
        elif RE_QUOTATION_MARKER.match(line):
            markers.append(Marker.QUOTE.value)
        elif RE_FORWARD_BANNER.match(line):
            markers.append(Marker.FORWARD.value)
        else:
            splitter = find_splitter(lines, i)
            if splitter:
                markers.extend(Marker.SPLITTER.value * len(splitter))
                i = splitter.end
                continue
            markers.append(Marker.TEXT.value)

        i += 1

    return "".join(markers)


classify = mark_message_lines


# ---------------------------------------------------------------------------
# Quotation resolution
# ---------------------------------------------------------------------------

def _suppress_noise(markers: str) -> str:
    # Lone '>' lines without a splitter are not quotations (e.g. ">>> Visit")
    if Marker.SPLITTER.value not in markers and not RE_NOISY_QUOTES.search(markers):
        return markers.replace(Marker.QUOTE.value, Marker.TEXT.value)
    return markers


def _leading_forward(lines: list[str], markers: str) -> Resolution | None:
    if RE_LEADING_FORWARD.match(markers):
        return Resolution(list(lines), rule="leading_forward")
    return None


def _inline_reply(lines: list[str], markers: str) -> Resolution | None:
    for reply in RE_INLINE_REPLY.finditer(markers):
        start = reply.start()
        links = (
            RE_PARENTHESIS_LINK.search(lines[start - 1])
            or RE_PARENTHESIS_LINK.match(lines[start].strip())
        )
        if not links:
            log.debug("Inline reply at line %d, keeping the whole message", start)
            return Resolution(list(lines), rule="inline_reply")
    return None


def _trailing_quotation(lines: list[str], markers: str) -> Resolution | None:
    quotation = RE_TRAILING_QUOTATION.search(markers)
    if quotation:
        return Resolution(
            lines[:quotation.start()],
            quotation=(quotation.start(), len(lines)),
            rule="trailing_quotation",
        )
    return None


def _embedded_quotation(lines: list[str], markers: str) -> Resolution | None:
    quotation = RE_QUOTATION.search(markers) or RE_EMPTY_QUOTATION.search(markers)
    if quotation:
        start, end = quotation.span(1)
        return Resolution(
            lines[:start] + lines[end:],
            quotation=(start, end),
            rule="embedded_quotation",
        )
    return None


# Evaluated in order; the first rule returning a Resolution wins.
RESOLUTION_RULES: tuple[Callable[[list[str], str], Resolution | None], ...] = (
    _leading_forward,
    _inline_reply,
    _trailing_quotation,
    _embedded_quotation,
)


def find_quotation(lines: list[str], markers: str) -> Resolution:
    """Decide which of *lines* belong to the newest message."""
    markers = _suppress_noise(markers)

    for rule in RESOLUTION_RULES:
        resolution = rule(lines, markers)
        if resolution is not None:
            log.debug("Quotation rule %s matched %r", resolution.rule, markers)
            return resolution

    return Resolution(list(lines))


def process_marked_lines(lines: list[str], markers: str) -> list[str]:
    """Return only the lines of the last message.

    >>> process_marked_lines(["1", "2", "3", "4"], "tsmt")
    ['1', '4']
    """
    return find_quotation(lines, markers).lines


resolve = process_marked_lines


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def extract_from_text(message: str) -> str:
    """Extract the reply from a plain-text message body."""
    delimiter = get_delimiter(message)
    lines = split_lines(preprocess(message, delimiter))

    markers = mark_message_lines(lines)
    lines = process_marked_lines(lines, markers)

    return postprocess(delimiter.join(lines))
