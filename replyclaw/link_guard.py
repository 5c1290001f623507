"""Link neutralisation applied around the plain-text pipeline.

Angle-bracketed URLs can wrap over several lines, and a continuation line that
starts with ``>`` looks exactly like a quotation marker.  Before classifying
lines the brackets are swapped for ``@@`` sentinels; afterwards the swap is
undone.
"""

from __future__ import annotations

import re

from .patterns import RE_LINK, RE_NORMALIZED_LINK, RE_ON_DATE_SMB_WROTE_INLINE


def _on_quoted_line(text: str, offset: int) -> bool:
    line_start = text.rfind("\n", 0, offset) + 1
    return text[line_start:offset].lstrip().startswith(">")


def guard(text: str) -> str:
    """Replace ``<http://...>`` links outside quoted lines with ``@@http://...@@``."""

    def _replace(match: re.Match) -> str:
        if _on_quoted_line(text, match.start()):
            return match.group(0)
        return f"@@{match.group(1)}@@"

    return RE_LINK.sub(_replace, text)


def unguard(text: str) -> str:
    """Restore links hidden by :func:`guard`."""
    return RE_NORMALIZED_LINK.sub(lambda m: f"<{m.group(1)}>", text)


def split_long_header_line(text: str, delimiter: str) -> str:
    """Move an "On <date>, <person> wrote:" header that shares a line with
    reply text onto a line of its own.
    """

    def _replace(match: re.Match) -> str:
        offset = match.start()
        if offset > 0 and text[offset - 1] != "\n":
            return delimiter + match.group(0)
        return match.group(0)

    return RE_ON_DATE_SMB_WROTE_INLINE.sub(_replace, text)


def preprocess(text: str, delimiter: str) -> str:
    """Prepare a message for line classification."""
    return split_long_header_line(guard(text), delimiter)


def postprocess(text: str) -> str:
    return unguard(text).strip()
