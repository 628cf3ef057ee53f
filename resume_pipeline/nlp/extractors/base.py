"""
Common types for the per-format extractors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class ExtractedText:
    """Text pulled out of one uploaded document."""

    text: str
    page_count: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


class BaseExtractor(ABC):
    """
    Reads one family of document formats.

    Subclasses list the media types they accept in ``media_types``. They get
    bytes that already passed upload validation and return raw text; a
    document that cannot be read raises ``ExtractionFailedError``.
    """

    media_types: ClassVar[tuple[str, ...]] = ()

    def can_extract(self, media_type: str) -> bool:
        return media_type in self.media_types

    @abstractmethod
    def extract_from_bytes(
        self, content: bytes, media_type: str, filename: str = "document"
    ) -> ExtractedText:
        """
        Args:
            content: Document bytes
            media_type: Declared media type of the upload
            filename: Original filename, only used in log messages

        Returns:
            ExtractedText holding the text before normalization
        """
