from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "BOOKFROMHUB_"

GITHUB_API_ROOT = "https://api.github.com"
USER_AGENT = "BookFromHub/1.0"
GITHUB_ACCEPT = "application/vnd.github.v3+json"

MARKDOWN_SUFFIX = ".md"
PAGE_BREAK_SEPARATOR = "\n\n\\newpage\n\n"

SOURCE_FILENAME = "book.md"
OUTPUT_FILENAME = "book.pdf"
WORKSPACE_PREFIX = "bookfromhub-"

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "GITHUB_API_ROOT",
    "USER_AGENT",
    "GITHUB_ACCEPT",
    "MARKDOWN_SUFFIX",
    "PAGE_BREAK_SEPARATOR",
    "SOURCE_FILENAME",
    "OUTPUT_FILENAME",
    "WORKSPACE_PREFIX",
]
