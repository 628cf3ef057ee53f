"""
File content extractors for various document formats.

Supports extraction of text from PDF, DOCX, DOC and TXT files.
"""

from .base import BaseExtractor, ExtractedText
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .text_extractor import TextExtractor
from .extractor_factory import DocumentTextExtractor

__all__ = [
    "BaseExtractor",
    "ExtractedText",
    "PDFExtractor",
    "DOCXExtractor",
    "TextExtractor",
    "DocumentTextExtractor",
]
