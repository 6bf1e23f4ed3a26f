"""
Grant document extraction via LLM.

Turns one grant-program PDF into an ExtractedGrantDetails record. Two modes:

- ``file``: the PDF is attached to the request as a base64 data URI
- ``text``: text is pulled locally (PyPDF2, then pdfplumber) and sent inline,
  for models without PDF input
"""

import logging
from typing import Any, Dict, List, Optional

from grant_matcher.core import config
from grant_matcher.core.domain_models import ExtractedGrantDetails
from grant_matcher.core.errors import ExtractionError
from grant_matcher.core.schemas import GRANT_EXTRACTION_SCHEMA
from grant_matcher.core.utils import truncate
from grant_matcher.ingest.document_store import GrantDocument
from grant_matcher.ingest.pdf_parser import PDFParser
from grant_matcher.llm.client import LLMClient


logger = logging.getLogger(__name__)

EXTRACTION_MODES = ("file", "text")

SYSTEM_PROMPT = "You are an expert grant program analyst."

INSTRUCTIONS = """You will analyze the provided PDF document to extract key details about the grant program, including eligibility criteria, funding amount, and application deadline.

Provide the output in the following JSON format:
{
  "programName": "",
  "eligibilityCriteria": "",
  "fundingAmount": "",
  "deadline": "",
  "description": "",
  "applicationProcess": "",
  "contactInformation": ""
}

If a detail is not stated in the document, say so in that field rather than leaving it empty."""

# Roughly 30k tokens of document text
MAX_TEXT_CHARS = 120_000


class GrantExtractor:
    """Extract structured grant details from a single document."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        mode: Optional[str] = None,
        parser: Optional[PDFParser] = None,
    ):
        """
        Args:
            llm: LLM client (created from config if omitted)
            mode: "file" or "text" (default: EXTRACTION_MODE)
            parser: PDF text parser used in text mode
        """
        mode = (mode or config.EXTRACTION_MODE).lower()
        if mode not in EXTRACTION_MODES:
            raise ValueError(
                f"Unsupported extraction mode '{mode}'. Available modes: {', '.join(EXTRACTION_MODES)}"
            )

        self.mode = mode
        self.llm = llm or LLMClient()
        self.parser = parser or PDFParser()

    def build_messages(self, document: GrantDocument) -> List[Dict[str, Any]]:
        """
        Build the chat messages for one document.

        Raises:
            ExtractionError: If text mode finds no text in the PDF
        """
        if self.mode == "file":
            user_content: List[Dict[str, Any]] = [
                {"type": "text", "text": INSTRUCTIONS + "\n\nAnalyze the following PDF document:"},
                {
                    "type": "file",
                    "file": {
                        "filename": document.filename,
                        "file_data": document.data_uri,
                    },
                },
            ]
        else:
            text = self.parser.extract_text(document.content)
            if not text:
                raise ExtractionError(document.filename, "no extractable text in PDF")
            user_content = [
                {
                    "type": "text",
                    "text": (
                        f"{INSTRUCTIONS}\n\nAnalyze the following PDF document "
                        f"({document.filename}):\n\n{truncate(text, MAX_TEXT_CHARS)}"
                    ),
                },
            ]

        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_content},
        ]

    def extract(self, document: GrantDocument) -> ExtractedGrantDetails:
        """
        Extract grant details from one document.

        Raises:
            ExtractionError: On any failure (API error, bad JSON, missing field)
        """
        logger.info(f"Extracting grant details from {document.filename} ({self.mode} mode)")

        messages = self.build_messages(document)

        try:
            data = self.llm.chat_json(messages, "grant_program_details", GRANT_EXTRACTION_SCHEMA)
            details = ExtractedGrantDetails.from_dict(data)
        except Exception as e:
            raise ExtractionError(document.filename, f"{type(e).__name__}: {e}") from e

        logger.info(f"Extracted '{details.program_name}' from {document.filename}")
        return details
