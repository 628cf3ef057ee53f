"""
Skills parser for resumes.

Matches the skills taxonomy against the skills section, or the whole
resume when it has none.
"""

import re
from typing import Optional

from resume_pipeline.nlp.preprocessor import find_section
from resume_pipeline.nlp.ruleset import ParsingRuleset
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


def compile_term(term: str) -> re.Pattern[str]:
    """
    Whole-word, case-insensitive pattern for a taxonomy term.

    Lookarounds stand in for ``\\b`` because terms such as ``C++``,
    ``C#`` and ``.NET`` start or end with non-word characters.
    """
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


class SkillsParser:
    """Parser for extracting known skills from resume text."""

    def __init__(self, ruleset: Optional[ParsingRuleset] = None):
        self.ruleset = ruleset or ParsingRuleset()
        self._terms = [(term, compile_term(term)) for term in self.ruleset.skill_terms]

    def parse(self, text: str) -> list[str]:
        """
        Extract skills in taxonomy order, each at most once.

        Returns:
            Canonical taxonomy spellings of every matched term
        """
        section = find_section(text, self.ruleset.sections.skills)
        skills = self.match_terms(section or text)
        logger.debug(
            f"Found {len(skills)} skills in {'skills section' if section else 'full text'}"
        )
        return skills

    def match_terms(self, text: str) -> list[str]:
        return [term for term, pattern in self._terms if pattern.search(text)]
