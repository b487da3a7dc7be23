"""Plain-text helpers shared by the translation adapter and the upload route."""
from __future__ import annotations

import re
from typing import List

# A sentence is a run of non-terminators closed by one or more terminators.
# The second branch keeps trailing text that has no terminator.
SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+")


def split_sentences(text: str) -> List[str]:
    """Split text into sentence-like tokens; joining them gives back the input."""
    return SENTENCE_RE.findall(text or "")


def _flush(chunks: List[str], buf: str) -> None:
    piece = buf.strip()
    if piece:
        chunks.append(piece)


def chunk_text(text: str, max_size: int) -> List[str]:
    """
    Split text into ordered chunks of at most max_size characters,
    breaking on sentence boundaries.

    A sentence longer than max_size is hard-split at the size boundary,
    and the remainder is split again until it fits.
    """
    if max_size <= 0:
        raise ValueError("max_size must be positive")

    chunks: List[str] = []
    current = ""
    for sentence in split_sentences(text):
        if len(current) + len(sentence) <= max_size:
            current += sentence
            continue

        _flush(chunks, current)
        current = sentence
        while len(current) > max_size:
            _flush(chunks, current[:max_size])
            current = current[max_size:]

    _flush(chunks, current)
    return chunks


def safe_filename(filename: str, default: str = "upload.pdf") -> str:
    safe = re.sub(r"[^a-zA-Z0-9.-]", "_", (filename or "").strip())
    safe = safe.lstrip(".")
    return safe or default
