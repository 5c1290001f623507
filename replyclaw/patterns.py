"""Locale phrase tables and the regular expressions built from them.

Everything here is compiled once at import and treated as read-only.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Locale phrase tables
# ---------------------------------------------------------------------------

# Words that open an "On <date>, <person> wrote:" line
BEGINNING_OF_LINE = (
    "On",  # English
    "Le",  # French
    "W dniu",  # Polish
    "Op",  # Dutch
)

# Most languages put a comma between date and sender; Polish uses a word
DATE_AND_SENDER_SEPARATOR = (",", "użytkownik")

END_OF_LINE = (
    # English
    "wrote", "sent",
    # French
    "a écrit",
    # Polish
    "napisał",
    # Dutch
    "schreef", "verzond", "geschreven",
)

ORIGINAL_MESSAGE = (
    # English
    "Original Message", "Reply Message",
    # German
    "Ursprüngliche Nachricht", "Antwort Nachricht",
    # Danish
    "Oprindelig meddelelse",
)

# Dutch puts the verb before the sender: "Op {date} schreef {somebody}:"
ON_DATE_WROTE_SMB_ENDING = ("schreef", "verzond", "geschreven")

FROM_DATE_HEADERS = (
    # "From" in different languages
    "From", "Van", "De", "Von", "Fra",
    # "Date" in different languages
    "Date", "Datum", "Envoyé",
)


def _words(phrases) -> str:
    return "|".join(rf"\b{re.escape(p)}\b" for p in phrases)


def _alternatives(phrases) -> str:
    return "|".join(re.escape(p) for p in phrases)


# ---------------------------------------------------------------------------
# Splitter pattern sources
# ---------------------------------------------------------------------------

RE_ON_DATE_SMB_WROTE = (
    rf"(-*[ ]?({_words(BEGINNING_OF_LINE)})[ ].*"
    rf"({_alternatives(DATE_AND_SENDER_SEPARATOR)})(.*\n){{0,2}}.*"
    rf"({_words(END_OF_LINE)}):?-*)"
)

RE_ORIGINAL_MESSAGE = rf"[\s]*[-]+[ ]*({_alternatives(ORIGINAL_MESSAGE)})[ ]*[-]+"

RE_ON_DATE_WROTE_SMB = (
    rf"-*[ ]?(Op)[ ].*(.*\n){{0,2}}.*({_alternatives(ON_DATE_WROTE_SMB_ENDING)})[ ].*:"
)

RE_FROM_COLON_OR_DATE_COLON = (
    rf"(_+\r?\n)?[\s]*([*]?(?:{_alternatives(FROM_DATE_HEADERS)}))[\s]?:[*]? .*"
)

RE_DATE_PERSON = r"(\d+/\d+/\d+|\d+\.\d+\.\d+).*@"

RE_WEEKDAY_HEADER = (
    r"\S{3,10}, \d\d? \S{3,10} 20\d\d,? \d\d?:\d\d(:\d\d)?( \S+){3,6}@\S+:"
)

# Tried in this order; the first one matching the window start wins.
SPLITTER_PATTERNS = tuple(
    re.compile(p)
    for p in (
        RE_ORIGINAL_MESSAGE,
        RE_DATE_PERSON,
        RE_ON_DATE_SMB_WROTE,
        RE_ON_DATE_WROTE_SMB,
        RE_FROM_COLON_OR_DATE_COLON,
        RE_WEEKDAY_HEADER,
    )
)

# Lines (current + look-ahead) a splitter may span
SPLITTER_MAX_LINES = 4

# ---------------------------------------------------------------------------
# Line and link patterns
# ---------------------------------------------------------------------------

RE_DELIMITER = re.compile(r"\r?\n")

RE_LINK = re.compile(r"<(https?://[^>]+)>", re.IGNORECASE)
RE_NORMALIZED_LINK = re.compile(r"@@(https?://[^>]*?)@@", re.IGNORECASE)
RE_ON_DATE_SMB_WROTE_INLINE = re.compile(RE_ON_DATE_SMB_WROTE)

RE_QUOTATION_MARKER = re.compile(r">+ ?")
RE_FORWARD_BANNER = re.compile(r"[-]+[ ]*Forwarded message[ ]*[-]+$")
RE_PARENTHESIS_LINK = re.compile(r"\(https?://")

# ---------------------------------------------------------------------------
# Marker-sequence patterns
# ---------------------------------------------------------------------------

RE_NOISY_QUOTES = re.compile(r"(me*){3}")
RE_LEADING_FORWARD = re.compile(r"[te]*f")
# Lookbehind so that both replies in e.g. "mtmtm" are found
RE_INLINE_REPLY = re.compile(r"(?<=m)e*((?:t+e*)+)m")
RE_TRAILING_QUOTATION = re.compile(r"(se*)+((t|f)+e*)+")
RE_QUOTATION = re.compile(r"((?:s|(?:me*){2,}).*me*)[te]*$")
RE_EMPTY_QUOTATION = re.compile(r"((?:s|(?:me*){2,}))e*")
