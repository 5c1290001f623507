"""HTML reply extraction.

Quoted content is cut out of the parsed document using structural cues left
by the mail clients (Gmail classes, ``blockquote`` tags, Outlook splitter
markup and element IDs, "From:" header blocks).  The cutters run in a fixed
order and the first one that finds something wins; the remaining tree is then
flattened to text.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from bs4 import BeautifulSoup, Comment, NavigableString, PageElement, Tag

from . import config

log = logging.getLogger(__name__)

# Element IDs of known quote containers
QUOTE_IDS = ["OLK_SRC_BODY_SECTION"]

# Exact inline styles of Microsoft splitter divs
_MICROSOFT_SPLITTER_STYLES = [
    # Outlook 2007, 2010
    "border:none;border-top:solid #B5C4DF 1.0pt;padding:3.0pt 0cm 0cm 0cm",
    # Windows Mail
    "padding-top: 5px; "
    "border-top-color: rgb(229, 229, 229); "
    "border-top-width: 1px; border-top-style: solid;",
]

# Older Outlook draws the splitter as a centred <hr> buried in formatting tags
_MICROSOFT_HR_SELECTOR = (
    'div > div[class="MsoNormal"][align="center"][style="text-align:center"]'
    ' > font > span > hr[size="3"][width="100%"][align="center"][tabindex="-1"]'
)

_FROM_BLOCK_PREFIXES = ("From:", "Date:")


def _remove(elements: Iterable[PageElement]) -> None:
    for el in elements:
        # A nested match goes away with its already removed ancestor
        if isinstance(el, Tag) and el.decomposed:
            continue
        el.decompose()


def _remove_following_siblings(element: PageElement) -> None:
    while element.next_sibling is not None:
        element.next_sibling.extract()


# ---------------------------------------------------------------------------
# Cutters
# ---------------------------------------------------------------------------

def cut_gmail_quote(soup: BeautifulSoup) -> bool:
    """Cut every element with class ``gmail_quote``."""
    quotes = soup.select(".gmail_quote")
    if quotes:
        _remove(quotes)
        return True
    return False


def cut_blockquote(soup: BeautifulSoup) -> bool:
    quotes = soup.find_all("blockquote")
    if quotes:
        _remove(quotes)
        return True
    return False


def cut_microsoft_quote(soup: BeautifulSoup) -> bool:
    """Cut the Microsoft splitter block and everything following it."""
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    splitter = soup.find("div", style=_MICROSOFT_SPLITTER_STYLES)
    if splitter is not None:
        if splitter.parent is not None and splitter.parent.contents[0] is splitter:
            splitter = splitter.parent
    else:
        hr = soup.select_one(_MICROSOFT_HR_SELECTOR)
        if hr is None:
            return False
        # hr -> span -> font -> div.MsoNormal -> div
        splitter = hr.parent.parent.parent.parent

    _remove_following_siblings(splitter)
    splitter.extract()
    return True


def cut_by_id(soup: BeautifulSoup) -> bool:
    for quote_id in QUOTE_IDS:
        quotes = soup.find_all(id=quote_id)
        if quotes:
            _remove(quotes)
            return True
    return False


def _starts_with_header(text: str | None) -> bool:
    return bool(text) and text.lstrip().startswith(_FROM_BLOCK_PREFIXES)


def cut_from_block(soup: BeautifulSoup) -> bool:
    """Cut the block that follows a "From:"/"Date:" header."""
    blocks = soup.find_all(lambda tag: _starts_with_header(tag.get_text()))

    if blocks:
        # The header is wrapped in some tag: climb to its div and drop the
        # block after it.
        block = blocks[-1]
        while block.parent is not None:
            if block.name == "div":
                quoted = block.find_next_sibling()
                if quoted is None:
                    return False
                quoted.decompose()
                return True
            block = block.parent
        return False

    # The header sits in the trailing text of an element, e.g. right after <hr>
    for block in soup.find_all(True):
        tail = block.next_sibling
        if isinstance(tail, NavigableString) and _starts_with_header(str(tail)):
            _remove_following_siblings(block)
            block.extract()
            return True

    return False


# Evaluated in order; only the first cutter that finds something is applied.
QUOTE_CUTTERS: tuple[tuple[str, Callable[[BeautifulSoup], bool]], ...] = (
    ("gmail_quote", cut_gmail_quote),
    ("blockquote", cut_blockquote),
    ("microsoft_quote", cut_microsoft_quote),
    ("quote_id", cut_by_id),
    ("from_block", cut_from_block),
)


def cut_quotations(soup: BeautifulSoup) -> str | None:
    """Cut quoted content out of *soup* in place.

    Returns the name of the cutter that fired, or ``None``.
    """
    for name, cutter in QUOTE_CUTTERS:
        if cutter(soup):
            log.debug("HTML quotation cut by %s", name)
            return name
    return None


def extract_from_html(message: str) -> str:
    """Extract the reply text from an HTML message body."""
    message = message.strip()
    if not message:
        return ""

    soup = BeautifulSoup(message, config.HTML_PARSER)
    cut_quotations(soup)

    return soup.get_text()
