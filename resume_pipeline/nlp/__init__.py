"""
Text extraction and rule-based entity extraction for resumes.
"""

from .entity_extractor import EntityExtractor
from .extractors import DocumentTextExtractor, ExtractedText
from .preprocessor import DateRange, extract_dates, find_section, normalize_text, split_into_entries
from .ruleset import ParsingRuleset, Ruleset, ScoringRules, default_ruleset, load_ruleset

__all__ = [
    "EntityExtractor",
    "DocumentTextExtractor",
    "ExtractedText",
    "DateRange",
    "extract_dates",
    "find_section",
    "normalize_text",
    "split_into_entries",
    "ParsingRuleset",
    "Ruleset",
    "ScoringRules",
    "default_ruleset",
    "load_ruleset",
]
