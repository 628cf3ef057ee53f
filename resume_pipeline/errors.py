"""
Exception hierarchy for the resume parsing pipeline.

Only text extraction and document storage raise these; entity extraction
and confidence scoring degrade to empty values instead.
"""


class ResumePipelineError(Exception):
    """Base exception for pipeline errors."""

    pass


# ---------------------------------------------------------------------------
# Invalid input: rejected before any processing
# ---------------------------------------------------------------------------


class InvalidDocumentError(ResumePipelineError, ValueError):
    """Raised when an upload fails validation (type, size, emptiness)."""

    pass


class EmptyDocumentError(InvalidDocumentError):
    """Raised when the uploaded buffer has no bytes."""

    def __init__(self, message: str = "File is empty"):
        super().__init__(message)


class FileTooLargeError(InvalidDocumentError):
    """Raised when the upload exceeds the size limit."""

    def __init__(self, size_bytes: int, max_size_bytes: int):
        self.size_bytes = size_bytes
        self.max_size_bytes = max_size_bytes
        super().__init__(
            f"File size ({size_bytes} bytes) exceeds maximum allowed size of "
            f"{max_size_bytes // (1024 * 1024)}MB"
        )


class UnsupportedMediaTypeError(InvalidDocumentError):
    """Raised when the declared media type is not one of the supported types."""

    def __init__(self, media_type: str):
        self.media_type = media_type
        super().__init__(
            f"Unsupported file type: {media_type}. Supported types: PDF, DOC, DOCX, TXT"
        )


# ---------------------------------------------------------------------------
# Extraction failures: the document was accepted but yielded no usable text
# ---------------------------------------------------------------------------


class ExtractionFailedError(ResumePipelineError):
    """Raised when a supported document cannot be turned into text."""

    pass


class ScannedDocumentError(ExtractionFailedError):
    """Raised when a PDF has no extractable text layer."""

    def __init__(self, detail: str | None = None):
        message = (
            "Failed to extract text from PDF. The document may be scanned or corrupted. "
            "OCR processing is not supported."
        )
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InsufficientTextError(ExtractionFailedError):
    """Raised when extraction produced too little text to parse."""

    def __init__(self, length: int, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Extracted text is too short or empty ({length} characters, minimum {minimum}). "
            "The file may be corrupted or scanned."
        )


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------


class StorageError(ResumePipelineError):
    """Raised when the original document cannot be stored or retrieved."""

    pass


class StorageUnavailableError(StorageError):
    """Raised when the storage backend cannot be reached."""

    pass


class DocumentNotFoundError(StorageError):
    """Raised when a storage key does not resolve to a stored document."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Document not found: {key}")


class InvalidDocumentUrlError(StorageError, ValueError):
    """Raised when a document URL does not belong to the configured storage."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid document URL format: {url}")
