"""
Logging for the resume parsing pipeline.

Loguru writes human-readable output to stderr and a rotating log file. A
third sink, ``audit.log``, receives only records bound with an
``audit_type`` and records what happened to each uploaded resume (parsed,
flagged for review, re-parsed, stored).

Resume text and candidate contact details are personal data: audit entries
never carry them, and tracebacks only expand local variables in a
development debug session.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from resume_pipeline.utils.config import AppSettings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]} | {message}"

REDACTED = "***REDACTED***"

# Credentials are never logged
_SECRET_KEYS = ("password", "passwd", "secret", "token", "api_key", "apikey", "credential")

# Candidate data that must stay out of the audit trail
_PERSONAL_KEYS = frozenset({
    "raw_text", "rawtext", "text", "email", "phone", "first_name", "last_name",
    "firstname", "lastname", "location", "linkedin_url", "github_url",
})

logger.configure(extra={"name": "resume_pipeline"})


def _is_audit_record(record: dict[str, Any]) -> bool:
    return "audit_type" in record["extra"]


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Install the console, file and audit sinks.

    Safe to call again after settings change; existing sinks are replaced.
    """
    settings = settings or get_settings()
    log_settings = settings.logging
    diagnose = settings.diagnose_tracebacks

    logger.remove()

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
        )

    log_dir: Path = log_settings.file_path.parent
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Log directory {log_dir} is not writable, file logging disabled: {e}")
        return

    logger.add(
        log_settings.file_path,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=diagnose,
        enqueue=True,
    )

    # Review decisions outlive regular logs
    logger.add(
        log_dir / "audit.log",
        format=AUDIT_FORMAT,
        level="INFO",
        filter=_is_audit_record,
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )

    logger.debug(f"Logging initialized - Level: {log_settings.level}, directory: {log_dir}")


def get_logger(name: str) -> Any:
    """Logger bound to a module or class name."""
    return logger.bind(name=name)


def redact(data: Any) -> Any:
    """
    Copy of ``data`` safe for the audit trail.

    Credential values and candidate personal data are replaced by a marker;
    nested dicts and lists are walked.
    """
    if isinstance(data, dict):
        cleaned = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if lowered in _PERSONAL_KEYS or any(s in lowered for s in _SECRET_KEYS):
                cleaned[key] = REDACTED
            else:
                cleaned[key] = redact(value)
        return cleaned
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


def audit_log(action: str, details: dict[str, Any], audit_type: str = "DECISION") -> None:
    """
    Write one entry to the audit log.

    Args:
        action: ``AuditAction`` value, e.g. ``"resume_flagged_for_review"``
        details: Identifiers and scores describing the event
        audit_type: ``DECISION`` for parse outcomes, ``STORAGE`` for documents
    """
    logger.bind(name="audit", audit_type=audit_type).info(f"{action} | {redact(details)}")


class LoggerMixin:
    """
    Gives a class a ``logger`` bound to its class name.

    Usage:
        class ConfidenceScorer(LoggerMixin):
            def score(self, entities):
                self.logger.info("Scoring...")
    """

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


setup_logging()
