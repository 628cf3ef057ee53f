"""
Data models for the resume parsing pipeline.

Pydantic models for parsed resume data, confidence scores, quality reports,
response envelopes, and candidate creation payloads.
"""

from .base import EmbeddedModel
from .candidate import CandidateCreate, CandidateOverrides
from .resume import (
    CertificationEntry,
    Confidence,
    EducationEntry,
    ExtractedEntities,
    Location,
    ParsedResume,
    ParseResponse,
    ParseResponseData,
    ParseResult,
    PersonalInfo,
    QualityReport,
    SupportedTypes,
    WorkExperienceEntry,
)

__all__ = [
    # Base
    "EmbeddedModel",
    # Resume
    "Location",
    "PersonalInfo",
    "WorkExperienceEntry",
    "EducationEntry",
    "CertificationEntry",
    "ExtractedEntities",
    "Confidence",
    "QualityReport",
    "ParsedResume",
    "ParseResult",
    "ParseResponse",
    "ParseResponseData",
    "SupportedTypes",
    # Candidate
    "CandidateCreate",
    "CandidateOverrides",
]
