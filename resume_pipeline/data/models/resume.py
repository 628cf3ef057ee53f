"""
Resume data models for the parsing pipeline.

Defines the structured candidate data inferred from a resume, the
confidence scores attached to it, and the response shapes returned to
callers.
"""

from typing import Optional

from pydantic import Field, computed_field

from resume_pipeline.utils.constants import UNKNOWN_SENTINEL

from .base import EmbeddedModel


class Location(EmbeddedModel):
    """Candidate location as found in the resume text."""

    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class PersonalInfo(EmbeddedModel):
    """Contact details. Every field is best-effort; absence is not an error."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    location: Optional[Location] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class WorkExperienceEntry(EmbeddedModel):
    """
    A single work experience entry.

    ``company`` and ``title`` hold ``"Unknown"`` when an entry boundary was
    detected but the field could not be resolved; ``is_partial`` exposes
    that state explicitly.
    """

    company: str = UNKNOWN_SENTINEL
    title: str = UNKNOWN_SENTINEL
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: bool = False
    description: str = ""

    @computed_field
    @property
    def is_partial(self) -> bool:
        return self.company == UNKNOWN_SENTINEL or self.title == UNKNOWN_SENTINEL


class EducationEntry(EmbeddedModel):
    """A single education entry. ``institution`` is always present."""

    institution: str
    degree: Optional[str] = None
    field: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    gpa: Optional[str] = None


class CertificationEntry(EmbeddedModel):
    """A recognised certification."""

    name: str


class ExtractedEntities(EmbeddedModel):
    """Everything the entity extractor inferred from a resume's text."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    work_experience: list[WorkExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    summary: Optional[str] = None
    raw_text: str = ""


class Confidence(EmbeddedModel):
    """Per-section and overall trust scores, each in [0, 1]."""

    overall: float = Field(ge=0.0, le=1.0)
    personal_info: float = Field(ge=0.0, le=1.0)
    work_experience: float = Field(ge=0.0, le=1.0)
    education: float = Field(ge=0.0, le=1.0)
    skills: float = Field(ge=0.0, le=1.0)


class QualityReport(EmbeddedModel):
    """Human-readable assessment of a parse. Purely descriptive."""

    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class ParsedResume(EmbeddedModel):
    """Final structured result of parsing one resume."""

    personal_info: PersonalInfo
    work_experience: list[WorkExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[CertificationEntry] = Field(default_factory=list)
    summary: Optional[str] = None
    raw_text: str
    confidence: Confidence
    needs_manual_review: bool

    @property
    def current_job(self) -> Optional[WorkExperienceEntry]:
        """The current position, else the first listed one."""
        for entry in self.work_experience:
            if entry.current:
                return entry
        return self.work_experience[0] if self.work_experience else None


class ParseResult(EmbeddedModel):
    """Outcome of a successful pipeline run."""

    parsed_resume: ParsedResume
    document_url: str
    quality_report: QualityReport


class ParseResponseData(EmbeddedModel):
    parsed_data: ParsedResume
    file_url: str
    quality_report: QualityReport


class ParseResponse(EmbeddedModel):
    """Response envelope returned to upload callers."""

    success: bool
    data: ParseResponseData
    message: str


class SupportedTypes(EmbeddedModel):
    """Accepted upload formats, for client-side validation."""

    extensions: list[str]
    mime_types: list[str]
