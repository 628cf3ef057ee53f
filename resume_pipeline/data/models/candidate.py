"""
Candidate creation payload built from a parsed resume.

The candidate service owns persistence and duplicate detection; this module
only defines the shape it consumes.
"""

from typing import Any, Optional

from pydantic import Field

from resume_pipeline.utils.constants import DEFAULT_SOURCE_TYPE

from .base import EmbeddedModel


class CandidateOverrides(EmbeddedModel):
    """Caller-supplied values merged into the candidate payload."""

    source_type: Optional[str] = None
    source_details: dict[str, Any] = Field(default_factory=dict)
    gdpr_consent: Optional[bool] = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)


class CandidateCreate(EmbeddedModel):
    """Flat candidate record; structured resume data rides in ``custom_fields``."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    location_city: Optional[str] = None
    location_state: Optional[str] = None
    location_country: Optional[str] = None
    current_company: Optional[str] = None
    current_title: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)  # top skills
    source_type: str = DEFAULT_SOURCE_TYPE
    source_details: dict[str, Any] = Field(default_factory=dict)
    gdpr_consent: bool = False
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    @property
    def can_be_created(self) -> bool:
        """Candidates are keyed by email; without one the record needs manual input."""
        return bool(self.email)
