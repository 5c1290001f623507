"""Single entry point dispatching a message body to the right extractor."""

from __future__ import annotations

from .html_extractor import extract_from_html
from .text_extractor import extract_from_text

MIME_TYPES = {
    "text/html": extract_from_html,
    "text/plain": extract_from_text,
}


class InvalidMimeTypeError(ValueError):
    """Raised when a message body has a MIME type we cannot extract from."""

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Invalid MIME type {mime_type}")
        self.mime_type = mime_type


def extract_from(message: str, mime_type: str) -> str:
    """Return the newly written part of *message*.

    *mime_type* must be ``"text/plain"`` or ``"text/html"``.
    """
    try:
        extractor = MIME_TYPES[mime_type]
    except KeyError:
        raise InvalidMimeTypeError(mime_type) from None
    return extractor(message)
