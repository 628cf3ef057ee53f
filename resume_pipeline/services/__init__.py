"""
Services for the resume parsing pipeline.

This package contains integration services:
- storage: Original document storage (GridFS or local)
"""

from .storage import (
    DocumentStorage,
    GridFSDocumentStorage,
    LocalDocumentStorage,
    generate_document_key,
    get_document_storage,
)

__all__ = [
    "DocumentStorage",
    "GridFSDocumentStorage",
    "LocalDocumentStorage",
    "generate_document_key",
    "get_document_storage",
]
