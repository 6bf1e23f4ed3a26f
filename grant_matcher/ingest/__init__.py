"""
Grant document loading and PDF text extraction.
"""

from .document_store import DocumentStore, GrantDocument
from .pdf_parser import PDFParser

__all__ = ['DocumentStore', 'GrantDocument', 'PDFParser']
