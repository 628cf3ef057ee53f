"""
Plain text decoding.
"""

import codecs

from resume_pipeline.utils.constants import MediaType
from resume_pipeline.utils.logger import get_logger

from .base import BaseExtractor, ExtractedText

logger = get_logger(__name__)

# Tried in order after the UTF-16 BOM check
ENCODINGS = ("utf-8", "cp1252")

CHARS_PER_PAGE = 3000


def decode(content: bytes) -> tuple[str, str]:
    """
    Decoded text and the codec that accepted it.

    UTF-16 is only used when the buffer starts with its byte order mark;
    without one, almost any even-length byte string decodes as UTF-16.
    """
    if content.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return content.decode("utf-16"), "utf-16"

    for encoding in ENCODINGS:
        try:
            return content.decode(encoding), encoding
        except UnicodeDecodeError:
            logger.debug(f"Content is not valid {encoding}")
    # latin-1 maps every byte
    return content.decode("latin-1"), "latin-1"


class TextExtractor(BaseExtractor):
    """Extractor for ``text/plain`` uploads."""

    media_types = (MediaType.TEXT.value,)

    def extract_from_bytes(
        self, content: bytes, media_type: str = MediaType.TEXT.value, filename: str = "document.txt"
    ) -> ExtractedText:
        text, encoding = decode(content)
        # utf-8 keeps a leading byte order mark as U+FEFF
        text = text.lstrip("\ufeff")

        logger.debug(f"Decoded {len(text)} characters from {filename} as {encoding}")
        return ExtractedText(
            text=text,
            page_count=max(1, len(text) // CHARS_PER_PAGE),
            metadata={"extractor": "plain_text", "encoding": encoding},
        )
