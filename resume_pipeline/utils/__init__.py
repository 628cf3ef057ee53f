"""
Shared utilities: settings, logging and fixed values.
"""

from resume_pipeline.utils.config import AppSettings, get_settings, reload_settings
from resume_pipeline.utils.constants import (
    MAX_FILE_SIZE_BYTES,
    MIN_TEXT_LENGTH,
    SUPPORTED_EXTENSIONS,
    SUPPORTED_MIME_TYPES,
    UNKNOWN_SENTINEL,
    AuditAction,
    MediaType,
)
from resume_pipeline.utils.logger import LoggerMixin, audit_log, get_logger, redact, setup_logging

__all__ = [
    "AppSettings",
    "get_settings",
    "reload_settings",
    "MAX_FILE_SIZE_BYTES",
    "MIN_TEXT_LENGTH",
    "SUPPORTED_EXTENSIONS",
    "SUPPORTED_MIME_TYPES",
    "UNKNOWN_SENTINEL",
    "AuditAction",
    "MediaType",
    "LoggerMixin",
    "audit_log",
    "get_logger",
    "redact",
    "setup_logging",
]
