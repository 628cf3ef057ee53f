"""
Document text extraction front door.

Validates an upload, dispatches it to the extractor for its declared media
type and normalizes the resulting text.
"""

from typing import Optional

from resume_pipeline.errors import (
    EmptyDocumentError,
    ExtractionFailedError,
    FileTooLargeError,
    UnsupportedMediaTypeError,
)
from resume_pipeline.nlp.preprocessor import normalize_text
from resume_pipeline.utils.constants import (
    MAX_FILE_SIZE_BYTES,
    SUPPORTED_EXTENSIONS,
    SUPPORTED_MIME_TYPES,
)
from resume_pipeline.utils.logger import get_logger

from .base import BaseExtractor, ExtractedText
from .docx_extractor import DOCXExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor

logger = get_logger(__name__)


class DocumentTextExtractor:
    """
    Turns uploaded document bytes into normalized text.

    The declared media type selects the extractor; content is never sniffed.
    A minimum text length is not enforced here, callers decide what is too
    short to be useful.
    """

    def __init__(
        self,
        max_size_bytes: int = MAX_FILE_SIZE_BYTES,
        extractors: Optional[list[BaseExtractor]] = None,
    ):
        self.max_size_bytes = max_size_bytes
        self._extractors = extractors if extractors is not None else [
            PDFExtractor(),
            DOCXExtractor(),
            TextExtractor(),
        ]

    def validate(self, content: bytes, media_type: str) -> None:
        """
        Reject uploads that must not reach a parser.

        Raises:
            EmptyDocumentError: The buffer is empty
            UnsupportedMediaTypeError: The media type is not accepted
            FileTooLargeError: The buffer exceeds the size limit
        """
        if not content:
            raise EmptyDocumentError()
        if not self.is_supported_media_type(media_type):
            raise UnsupportedMediaTypeError(media_type)
        if len(content) > self.max_size_bytes:
            raise FileTooLargeError(len(content), self.max_size_bytes)

    def get_extractor(self, media_type: str) -> Optional[BaseExtractor]:
        """Get the extractor registered for a media type."""
        for extractor in self._extractors:
            if extractor.can_extract(media_type):
                return extractor
        return None

    def extract(
        self, content: bytes, media_type: str, filename: str = "document"
    ) -> ExtractedText:
        """
        Validate, extract and normalize a document.

        Args:
            content: Raw document bytes
            media_type: Declared media type of the upload
            filename: Original filename (for logging)

        Returns:
            ExtractedText with normalized text

        Raises:
            InvalidDocumentError: The upload failed validation
            ScannedDocumentError: A PDF has no text layer
            ExtractionFailedError: The document could not be read
        """
        self.validate(content, media_type)

        extractor = self.get_extractor(media_type)
        if extractor is None:
            logger.warning(f"No extractor registered for media type: {media_type}")
            raise UnsupportedMediaTypeError(media_type)

        logger.info(f"Extracting text from {filename} ({media_type}, {len(content)} bytes)")

        try:
            raw = extractor.extract_from_bytes(content, media_type, filename)
        except ExtractionFailedError:
            raise
        except Exception as e:
            logger.error(f"Text extraction failed for {filename}: {e}")
            raise ExtractionFailedError(f"Failed to extract text from file: {e}") from e

        for warning in raw.warnings:
            logger.warning(f"{filename}: {warning}")

        text = normalize_text(raw.text)
        logger.info(f"Extracted {len(text)} characters from {filename}")

        return ExtractedText(
            text=text,
            page_count=raw.page_count,
            metadata=raw.metadata,
            warnings=raw.warnings,
        )

    @staticmethod
    def is_supported_media_type(media_type: str) -> bool:
        """Check if a media type is accepted for upload."""
        return media_type in SUPPORTED_MIME_TYPES

    @staticmethod
    def supported_extensions() -> list[str]:
        """Get list of all supported file extensions."""
        return list(SUPPORTED_EXTENSIONS)

    @staticmethod
    def supported_media_types() -> list[str]:
        """Get list of all supported media types."""
        return list(SUPPORTED_MIME_TYPES)
