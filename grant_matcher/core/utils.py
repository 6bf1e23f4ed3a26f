"""
Shared helpers for hashing, text cleanup and data URIs.
"""

import base64
import hashlib
import re


PDF_MIME_TYPE = "application/pdf"


def sha1_bytes(content: bytes) -> str:
    """
    Generate SHA1 hash of raw document content.

    Used to identify a document in logs independent of its file name.

    Examples:
        >>> sha1_bytes(b"Hello world")
        '7b502c3a1f48c8609ae212cdfb639dee39673f5e'
    """
    return hashlib.sha1(content).hexdigest()


def clean_text(text: str) -> str:
    """
    Clean text by normalizing whitespace and removing blank lines.

    Args:
        text: Raw text

    Returns:
        Cleaned text
    """
    # Replace runs of spaces/tabs with a single space
    text = re.sub(r'[ \t]+', ' ', text)
    lines = [line.strip() for line in text.split('\n')]
    return "\n".join(line for line in lines if line)


def to_data_uri(content: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
    """
    Encode bytes as an inline base64 data URI.

    Examples:
        >>> to_data_uri(b"%PDF")
        'data:application/pdf;base64,JVBERg=='
    """
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, marking the cut."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "\n[...truncated]"
