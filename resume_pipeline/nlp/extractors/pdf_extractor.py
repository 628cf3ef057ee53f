"""
PDF text extraction.

pdfplumber reads the text layer first; when it returns little or nothing,
pypdf gets a second pass and the longer result wins. A PDF with no text
layer at all is treated as a scanned image, which is not OCR'd.
"""

import io
from typing import Any, Callable

import pdfplumber
from pypdf import PdfReader

from resume_pipeline.errors import ScannedDocumentError
from resume_pipeline.utils.constants import MediaType
from resume_pipeline.utils.logger import get_logger

from .base import BaseExtractor, ExtractedText

logger = get_logger(__name__)

# pdfplumber output at or below this length triggers the pypdf pass
MIN_PRIMARY_TEXT_LENGTH = 50

PAGE_SEPARATOR = "\n\n"


def _string_fields(info: Any) -> dict[str, str]:
    """Document info entries with non-empty values, keys without the leading '/'."""
    if not info:
        return {}
    return {
        str(key).lstrip("/"): str(value)
        for key, value in info.items()
        if isinstance(value, str) and value.strip()
    }


def read_with_pdfplumber(content: bytes) -> tuple[list[str], dict[str, str]]:
    """Per-page text and document info via pdfplumber."""
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
        return pages, _string_fields(pdf.metadata)


def read_with_pypdf(content: bytes) -> tuple[list[str], dict[str, str]]:
    """Per-page text and document info via pypdf."""
    reader = PdfReader(io.BytesIO(content))
    pages = [page.extract_text() or "" for page in reader.pages]
    return pages, _string_fields(reader.metadata)


PageReader = Callable[[bytes], tuple[list[str], dict[str, str]]]


class PDFExtractor(BaseExtractor):
    """Extractor for PDF documents."""

    media_types = (MediaType.PDF.value,)

    def __init__(
        self,
        primary: PageReader = read_with_pdfplumber,
        fallback: PageReader = read_with_pypdf,
    ) -> None:
        self.primary = primary
        self.fallback = fallback

    def extract_from_bytes(
        self, content: bytes, media_type: str = MediaType.PDF.value, filename: str = "document.pdf"
    ) -> ExtractedText:
        failures: list[str] = []
        warnings: list[str] = []

        best = self._attempt("pdfplumber", self.primary, content, failures)
        if best is None or len(best.text.strip()) <= MIN_PRIMARY_TEXT_LENGTH:
            warnings.append("pdfplumber extraction yielded limited text, trying pypdf")
            second = self._attempt("pypdf", self.fallback, content, failures)
            if second is not None and (best is None or len(second.text.strip()) > len(best.text.strip())):
                best = second

        if best is None or not best.text.strip():
            logger.warning(f"No text layer found in {filename}")
            raise ScannedDocumentError("; ".join(failures) or None)

        logger.debug(f"Extracted {best.char_count} characters from {best.page_count} PDF pages ({filename})")
        return ExtractedText(
            text=best.text,
            page_count=best.page_count,
            metadata=best.metadata,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _attempt(
        name: str, reader: PageReader, content: bytes, failures: list[str]
    ) -> ExtractedText | None:
        # Both libraries raise a wide range of parser errors on malformed files
        try:
            pages, info = reader(content)
        except Exception as e:
            logger.debug(f"{name} could not read PDF: {e}")
            failures.append(f"{name}: {e}")
            return None

        metadata: dict[str, Any] = {"extractor": name, "page_count": len(pages)}
        if info:
            metadata["pdf_metadata"] = info
        return ExtractedText(
            text=PAGE_SEPARATOR.join(page for page in pages if page),
            page_count=len(pages),
            metadata=metadata,
        )
