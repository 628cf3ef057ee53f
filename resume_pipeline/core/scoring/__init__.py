"""Confidence scoring for parsed resumes."""

from .confidence_scorer import ConfidenceScorer, is_valid_email

__all__ = [
    "ConfidenceScorer",
    "is_valid_email",
]
