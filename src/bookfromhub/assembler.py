from __future__ import annotations

from collections.abc import Sequence

from .constraint import PAGE_BREAK_SEPARATOR
from .models import AssembledBook, FetchedDocument


def _is_supported(char: str) -> bool:
    code_point = ord(char)
    return code_point <= 0xFFFF and not 0xD800 <= code_point <= 0xDFFF


def strip_unsupported(text: str) -> str:
    """Drop astral-plane code points and surrogates the PDF fonts cannot render."""

    return "".join(char for char in text if _is_supported(char))


def assemble_book(documents: Sequence[FetchedDocument]) -> AssembledBook:
    combined = PAGE_BREAK_SEPARATOR.join(document.body for document in documents)
    return AssembledBook(body=strip_unsupported(combined))


__all__ = ["strip_unsupported", "assemble_book"]
