"""Settings read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HTML_PARSER = "html.parser"
DEFAULT_ENCODING = "utf-8"


@dataclass
class Settings:
    html_parser: str = DEFAULT_HTML_PARSER
    encoding: str = DEFAULT_ENCODING
    output_path: Optional[str] = None


def load_settings() -> Settings:
    """Build settings from BOOKMARKS_* environment variables."""
    return Settings(
        html_parser=os.getenv("BOOKMARKS_HTML_PARSER") or DEFAULT_HTML_PARSER,
        encoding=os.getenv("BOOKMARKS_ENCODING") or DEFAULT_ENCODING,
        output_path=os.getenv("BOOKMARKS_OUTPUT") or None,
    )
