"""
Core pipeline logic for resume parsing.

Submodules:
- pipeline: End-to-end parse orchestration and candidate mapping
- scoring: Confidence scoring and review decisions
"""

from .pipeline import (
    ResumeParsingPipeline,
    get_resume_pipeline,
    media_type_for_filename,
)
from .scoring import ConfidenceScorer

__all__ = [
    "ResumeParsingPipeline",
    "get_resume_pipeline",
    "media_type_for_filename",
    "ConfidenceScorer",
]
