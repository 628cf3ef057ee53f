"""
Application-wide constants for the resume parsing pipeline.

This module contains the fixed values shared across pipeline stages.
Tunable heuristics (taxonomy, regexes, weights) live in the ruleset instead.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "resume-pipeline"
APP_DISPLAY_NAME: Final[str] = "Resume Parsing Pipeline"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# File Types
# =============================================================================


class MediaType(str, Enum):
    """Media types accepted for resume uploads."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    DOC = "application/msword"
    TEXT = "text/plain"


SUPPORTED_MIME_TYPES: Final[tuple[str, ...]] = tuple(m.value for m in MediaType)

SUPPORTED_EXTENSIONS: Final[tuple[str, ...]] = (
    ".pdf",
    ".doc",
    ".docx",
    ".txt",
)

MIME_TYPE_BY_EXTENSION: Final[dict[str, str]] = {
    ".pdf": MediaType.PDF.value,
    ".docx": MediaType.DOCX.value,
    ".doc": MediaType.DOC.value,
    ".txt": MediaType.TEXT.value,
}

FALLBACK_MIME_TYPE: Final[str] = "application/octet-stream"


# =============================================================================
# Pipeline Limits
# =============================================================================

MAX_FILE_SIZE_MB: Final[int] = 10
MAX_FILE_SIZE_BYTES: Final[int] = MAX_FILE_SIZE_MB * 1024 * 1024

# Below this many characters the extracted text is treated as a failed extraction
MIN_TEXT_LENGTH: Final[int] = 100

# Owner key used when an upload is not yet tied to a candidate
DEFAULT_OWNER_KEY: Final[str] = "temp"

# Placeholder for a detected work entry whose company/title could not be resolved
UNKNOWN_SENTINEL: Final[str] = "Unknown"

DEFAULT_SOURCE_TYPE: Final[str] = "resume_upload"


# =============================================================================
# Enums
# =============================================================================


class AuditAction(str, Enum):
    """Types of pipeline actions that are written to the audit log."""

    RESUME_PARSED = "resume_parsed"
    RESUME_FLAGGED = "resume_flagged_for_review"
    RESUME_REPARSED = "resume_reparsed"
    DOCUMENT_STORED = "document_stored"
