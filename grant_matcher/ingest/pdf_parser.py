"""
Text extraction for grant PDFs, used when documents are sent to the model
as text instead of as file parts.

Backends are tried in order (PyPDF2, then pdfplumber); the first one that
yields enough text wins.
"""

import logging
from io import BytesIO
from typing import Callable, Iterable, List, Optional, Tuple

import PyPDF2
import pdfplumber

from grant_matcher.core.utils import clean_text


logger = logging.getLogger(__name__)


def _join_pages(pages: Iterable) -> str:
    return "\n\n".join(text for text in (page.extract_text() for page in pages) if text)


def _read_with_pypdf2(pdf_bytes: bytes) -> str:
    return _join_pages(PyPDF2.PdfReader(BytesIO(pdf_bytes)).pages)


def _read_with_pdfplumber(pdf_bytes: bytes) -> str:
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        return _join_pages(pdf.pages)


class PDFParser:
    """
    Pull plain text out of grant PDF bytes.

    Usage:
        text = PDFParser().extract_text(document.content)
        if text is None:
            ...  # scanned or empty PDF
    """

    def __init__(self, min_chars: int = 100):
        """
        Args:
            min_chars: Minimum stripped length for a backend's output to count
        """
        self.min_chars = min_chars
        self.backends: List[Tuple[str, Callable[[bytes], str]]] = [
            ("PyPDF2", _read_with_pypdf2),
            ("pdfplumber", _read_with_pdfplumber),
        ]

    def extract_text(self, pdf_bytes: bytes) -> Optional[str]:
        """
        Returns:
            Cleaned text from the first backend that yields enough of it,
            or None if every backend comes up short
        """
        for name, read in self.backends:
            try:
                text = read(pdf_bytes)
            except Exception as e:
                logger.debug(f"{name} could not read PDF: {e}")
                continue

            if len(text.strip()) > self.min_chars:
                logger.debug(f"Extracted {len(text)} chars with {name}")
                return clean_text(text)

            logger.debug(f"{name} returned too little text ({len(text.strip())} chars)")

        logger.warning("No extractable text found in PDF")
        return None
