"""
Entity extraction from normalized resume text.

Coordinates the section parsers to infer personal info, work experience,
education, skills, certifications and summary. Extraction is total: a
section that cannot be understood comes back empty, it never raises.
"""

import time
from typing import Callable, Optional, TypeVar

from resume_pipeline.data.models import ExtractedEntities, PersonalInfo
from resume_pipeline.utils.logger import get_logger

from .parsers import (
    CertificationsParser,
    ContactParser,
    EducationParser,
    ExperienceParser,
    SkillsParser,
    SummaryParser,
)
from .ruleset import ParsingRuleset, default_ruleset

logger = get_logger(__name__)

T = TypeVar("T")


class EntityExtractor:
    """
    Rule-based extractor of structured candidate data.

    Holds only immutable rules and compiled patterns, so one instance can
    serve any number of concurrent parses.

    Example:
        extractor = EntityExtractor()
        entities = extractor.extract(text)
        print(entities.personal_info.email, entities.skills)
    """

    def __init__(self, ruleset: Optional[ParsingRuleset] = None):
        self.ruleset = ruleset or default_ruleset().parsing

        self.contact_parser = ContactParser(self.ruleset.contact)
        self.experience_parser = ExperienceParser(self.ruleset.sections, self.ruleset.entries)
        self.education_parser = EducationParser(self.ruleset.sections, self.ruleset.entries)
        self.skills_parser = SkillsParser(self.ruleset)
        self.certifications_parser = CertificationsParser(self.ruleset.sections, self.ruleset.entries)
        self.summary_parser = SummaryParser(self.ruleset.sections, self.ruleset.entries)

    def extract(self, text: str) -> ExtractedEntities:
        """
        Extract all entities from resume text.

        Args:
            text: Normalized resume text

        Returns:
            ExtractedEntities; sections that were not found are empty
        """
        start_time = time.time()

        entities = ExtractedEntities(
            personal_info=self._run("personal info", self.contact_parser.parse, text, PersonalInfo),
            work_experience=self._run("work experience", self.experience_parser.parse, text, list),
            education=self._run("education", self.education_parser.parse, text, list),
            skills=self._run("skills", self.skills_parser.parse, text, list),
            certifications=self._run("certifications", self.certifications_parser.parse, text, list),
            summary=self._run("summary", self.summary_parser.parse, text, lambda: None),
            raw_text=text,
        )

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Entities extracted in {elapsed_ms}ms: "
            f"{len(entities.work_experience)} jobs, {len(entities.education)} education, "
            f"{len(entities.skills)} skills, {len(entities.certifications)} certifications"
        )
        return entities

    @staticmethod
    def _run(
        section: str,
        parse: Callable[[str], T],
        text: str,
        default: Callable[[], T],
    ) -> T:
        """Run one section parser, degrading to an empty value on failure."""
        try:
            return parse(text)
        except Exception as e:
            logger.exception(f"Error extracting {section}: {e}")
            return default()
