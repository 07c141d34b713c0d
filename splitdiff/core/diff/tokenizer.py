"""
Line tokenizer.

Splits raw text into logical lines after normalizing CRLF and bare CR
line endings to LF.
"""

from __future__ import annotations


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR to LF."""
    return text.replace('\r\n', '\n').replace('\r', '\n')


def tokenize(text: str) -> list[str]:
    """
    Split text into lines on LF after normalizing line endings.

    Text with N separators always yields N+1 lines, so an empty string
    yields a single empty line and a trailing separator yields a trailing
    empty line.
    """
    return normalize_line_endings(text).split('\n')


def split_lines(text: str) -> list[str]:
    """Tokenize text, treating an empty string as no content at all."""
    if not text:
        return []
    return tokenize(text)
