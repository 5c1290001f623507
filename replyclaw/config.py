"""Configuration loading from environment variables and defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


# Logging level for the command line tool
_level_name = _env("REPLYCLAW_LOG_LEVEL", "WARNING").upper()
if isinstance(logging.getLevelName(_level_name), int):
    LOG_LEVEL = _level_name
else:
    logging.getLogger(__name__).warning(
        "Invalid REPLYCLAW_LOG_LEVEL %r, falling back to WARNING", _level_name,
    )
    LOG_LEVEL = "WARNING"

# BeautifulSoup tree builder used for HTML bodies
HTML_PARSER = _env("REPLYCLAW_HTML_PARSER", "lxml")

# MIME type assumed by the CLI when it cannot tell from the file name
DEFAULT_MIME_TYPE = _env("REPLYCLAW_DEFAULT_MIME_TYPE", "text/plain")
