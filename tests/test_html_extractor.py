"""Tests for HTML quote cutting."""

import pytest
from bs4 import BeautifulSoup, Comment

from replyclaw.html_extractor import (
    cut_blockquote,
    cut_by_id,
    cut_from_block,
    cut_gmail_quote,
    cut_microsoft_quote,
    cut_quotations,
    extract_from_html,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _wrap_html(body_html: str) -> str:
    """Wrap an HTML fragment in a minimal document structure."""
    return f"<html><body>{body_html}</body></html>"


def _soup(body_html: str) -> BeautifulSoup:
    # html.parser keeps the nesting exactly as written
    return BeautifulSoup(_wrap_html(body_html), "html.parser")


OUTLOOK_STYLE = "border:none;border-top:solid #B5C4DF 1.0pt;padding:3.0pt 0cm 0cm 0cm"
WINDOWS_MAIL_STYLE = (
    "padding-top: 5px; border-top-color: rgb(229, 229, 229); "
    "border-top-width: 1px; border-top-style: solid;"
)


# ---------------------------------------------------------------------------
# Gmail
# ---------------------------------------------------------------------------

class TestGmailQuote:

    def test_gmail_quote_div(self):
        soup = _soup(
            '<div>My reply to you.</div>'
            '<div class="gmail_quote">'
            '<div class="gmail_attr">On Mon, Jan 1 wrote:</div>'
            '<div>Original message content</div>'
            '</div>'
        )
        assert cut_gmail_quote(soup)
        assert soup.get_text() == "My reply to you."

    def test_nested_gmail_quotes(self):
        soup = _soup(
            '<div>Reply</div>'
            '<div><div><div class="gmail_quote">On Mon wrote:'
            '<div class="gmail_quote">Older message</div>'
            '</div></div></div>'
        )
        assert cut_gmail_quote(soup)
        assert soup.get_text() == "Reply"

    def test_no_gmail_quote(self):
        assert not cut_gmail_quote(_soup("<div>Reply</div>"))


# ---------------------------------------------------------------------------
# Blockquote
# ---------------------------------------------------------------------------

class TestBlockquote:

    def test_all_blockquotes_removed(self):
        soup = _soup(
            "<div>Reply</div>"
            "<blockquote>first</blockquote>"
            "<div>middle</div>"
            "<blockquote>second<blockquote>nested</blockquote></blockquote>"
        )
        assert cut_blockquote(soup)
        assert soup.get_text() == "Replymiddle"

    def test_no_blockquote(self):
        assert not cut_blockquote(_soup("<div>Reply</div>"))


# ---------------------------------------------------------------------------
# Microsoft clients
# ---------------------------------------------------------------------------

class TestMicrosoftQuote:

    def test_outlook_splitter_first_child_cuts_parent(self):
        soup = _soup(
            '<div>Reply</div>'
            f'<div><div style="{OUTLOOK_STYLE}"><p>From: Bob</p></div>'
            '<p>Quoted</p></div>'
            '<div>More quoted</div>'
        )
        assert cut_microsoft_quote(soup)
        assert soup.get_text() == "Reply"

    def test_splitter_with_preceding_text_keeps_parent(self):
        soup = _soup(
            f'<div>Reply<div style="{WINDOWS_MAIL_STYLE}">From: Bob</div>'
            '<p>Quoted</p></div>'
        )
        assert cut_microsoft_quote(soup)
        assert soup.get_text() == "Reply"

    def test_hr_separator(self):
        soup = _soup(
            '<div>Reply</div>'
            '<div>'
            '<div class="MsoNormal" align="center" style="text-align:center">'
            '<font><span><hr size="3" width="100%" align="center" tabindex="-1">'
            '</span></font></div>'
            '<p>From: Bob</p>'
            '</div>'
            '<div>Quoted</div>'
        )
        assert cut_microsoft_quote(soup)
        assert soup.get_text() == "Reply"

    def test_style_must_match_exactly(self):
        soup = _soup('<div>Reply</div><div style="border-top:solid #B5C4DF 1.0pt">x</div>')
        assert not cut_microsoft_quote(soup)

    def test_comments_are_removed_even_without_splitter(self):
        soup = _soup("<div>Reply<!-- a note --></div>")
        assert not cut_microsoft_quote(soup)
        assert not soup.find_all(string=lambda s: isinstance(s, Comment))


# ---------------------------------------------------------------------------
# Quote container IDs
# ---------------------------------------------------------------------------

class TestCutById:

    def test_outlook_source_body_section(self):
        soup = _soup('<div>Reply</div><div id="OLK_SRC_BODY_SECTION">Quoted</div>')
        assert cut_by_id(soup)
        assert soup.get_text() == "Reply"

    def test_unknown_id(self):
        assert not cut_by_id(_soup('<div id="other">Reply</div>'))


# ---------------------------------------------------------------------------
# From: blocks
# ---------------------------------------------------------------------------

class TestFromBlock:

    def test_block_after_wrapped_header_removed(self):
        soup = _soup(
            "<div>Reply</div>"
            "<div><b>From:</b> Bob</div>"
            "<div>Quoted</div>"
        )
        assert cut_from_block(soup)
        text = soup.get_text()
        assert "Reply" in text
        assert "Quoted" not in text

    def test_last_header_is_used(self):
        soup = _soup(
            "<div>Reply</div>"
            "<div>Date: Monday</div>"
            "<div>Keep me</div>"
            "<div>From: Bob</div>"
            "<div>Quoted</div>"
        )
        assert cut_from_block(soup)
        text = soup.get_text()
        assert "Keep me" in text
        assert "Quoted" not in text

    def test_header_after_leading_whitespace(self):
        soup = _soup(
            "<div>Reply</div>"
            "<div>\n From: bob</div>"
            "<div>Quoted</div>"
        )
        assert cut_from_block(soup)
        assert "Quoted" not in soup.get_text()

    def test_header_in_trailing_text(self):
        soup = _soup("<div>Reply</div><hr>From: Bob<br>Quoted text")
        assert cut_from_block(soup)
        assert soup.get_text() == "Reply"

    def test_header_without_following_block(self):
        assert not cut_from_block(_soup("<div>Reply</div><div>From: Bob</div>"))

    def test_no_header(self):
        assert not cut_from_block(_soup("<div>Reply</div><div>Regards</div>"))


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

class TestCutQuotations:

    @pytest.mark.parametrize("body, cutter", [
        ('<div>R</div><div class="gmail_quote">q</div>', "gmail_quote"),
        ("<div>R</div><blockquote>q</blockquote>", "blockquote"),
        (f'<div>R</div><div><div style="{OUTLOOK_STYLE}">q</div></div>', "microsoft_quote"),
        ('<div>R</div><div id="OLK_SRC_BODY_SECTION">q</div>', "quote_id"),
        ("<div>R</div><div>From: Bob</div><div>q</div>", "from_block"),
    ])
    def test_reports_cutter(self, body, cutter):
        soup = _soup(body)
        assert cut_quotations(soup) == cutter
        assert "q" not in soup.get_text()

    def test_stops_at_first_cutter(self):
        soup = _soup(
            '<div>Reply</div>'
            '<div class="gmail_quote">Gmail quote</div>'
            '<blockquote>Still here</blockquote>'
        )
        assert cut_quotations(soup) == "gmail_quote"
        assert soup.get_text() == "ReplyStill here"

    def test_nothing_to_cut(self):
        soup = _soup("<div>Just a reply</div>")
        assert cut_quotations(soup) is None
        assert soup.get_text() == "Just a reply"


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------

class TestExtractFromHtml:

    def test_blockquote_reply(self):
        message = (
            "Reply<blockquote>On 11-Apr-2011, at 6:54 PM, Bob &lt;bob@example.com&gt; "
            "wrote:<div>Test</div></blockquote>"
        )
        assert extract_from_html(message).strip() == "Reply"

    def test_gmail_reply(self):
        message = _wrap_html(
            '<div dir="ltr">Sounds good!</div>'
            '<div class="gmail_extra"><div class="gmail_quote">'
            "On Tue, Bob wrote:<blockquote>Old</blockquote></div></div>"
        )
        assert extract_from_html(message).strip() == "Sounds good!"

    def test_outlook_reply(self):
        message = _wrap_html(
            "<div>Thanks</div>"
            f'<div><div style="{OUTLOOK_STYLE}"><p><b>From:</b> Bob</p></div>'
            "<p>Quoted</p></div>"
        )
        assert extract_from_html(message).strip() == "Thanks"

    def test_malformed_html(self):
        assert extract_from_html("<div>Reply<blockquote>Quoted").strip() == "Reply"

    def test_no_quotation(self):
        assert extract_from_html("<div>Hello there</div>").strip() == "Hello there"

    @pytest.mark.parametrize("message", ["", "   ", "\n\t"])
    def test_empty_message(self, message):
        assert extract_from_html(message) == ""

    def test_configured_parser(self, monkeypatch):
        monkeypatch.setattr("replyclaw.config.HTML_PARSER", "html.parser")
        assert extract_from_html("<p>Reply</p><blockquote>q</blockquote>") == "Reply"
