"""
Read-only access to the directory of grant-program PDFs.

Handles:
- Enumerating accepted documents (``.pdf``, any case)
- Loading document bytes and encoding them for the extraction model
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from grant_matcher.core import config
from grant_matcher.core.utils import PDF_MIME_TYPE, sha1_bytes, to_data_uri


logger = logging.getLogger(__name__)

ACCEPTED_EXTENSIONS = {".pdf"}


@dataclass
class GrantDocument:
    """A grant-program document loaded fully into memory."""
    filename: str
    path: Path
    content: bytes
    mime_type: str = PDF_MIME_TYPE

    @property
    def data_uri(self) -> str:
        """Inline ``data:<mime>;base64,<payload>`` reference."""
        return to_data_uri(self.content, self.mime_type)

    @property
    def content_hash(self) -> str:
        return sha1_bytes(self.content)

    @property
    def size(self) -> int:
        return len(self.content)


class DocumentStore:
    """
    Directory of grant-program PDFs, enumerated at request time.

    Usage:
        store = DocumentStore("grants")
        for path in store.list_documents():
            doc = store.read(path)
    """

    def __init__(self, directory: Union[str, Path, None] = None):
        """
        Args:
            directory: Folder holding the PDFs (defaults to GRANTS_DIR)
        """
        self.directory = Path(directory if directory is not None else config.GRANTS_DIR)

    def exists(self) -> bool:
        return self.directory.is_dir()

    def list_documents(self) -> List[Path]:
        """
        List accepted documents in file-name order.

        A missing or unreadable directory is treated as an empty store.
        """
        if not self.exists():
            logger.warning(f"Grant document directory not found: {self.directory}")
            return []

        try:
            paths = [
                path for path in self.directory.iterdir()
                if path.is_file() and path.suffix.lower() in ACCEPTED_EXTENSIONS
            ]
        except OSError as e:
            logger.warning(f"Cannot list grant document directory {self.directory}: {e}")
            return []

        paths.sort(key=lambda p: p.name)

        logger.debug(f"Found {len(paths)} grant documents in {self.directory}")
        return paths

    def read(self, path: Path) -> GrantDocument:
        """
        Load a document's bytes.

        Raises:
            OSError: if the file cannot be read
        """
        document = GrantDocument(filename=path.name, path=path, content=path.read_bytes())
        logger.debug(f"Read {path.name} ({document.size} bytes, sha1 {document.content_hash[:12]})")
        return document
