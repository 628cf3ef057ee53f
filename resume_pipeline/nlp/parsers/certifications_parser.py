"""
Certifications parser for resumes.

Recognises a small fixed set of certifications inside the certifications
section only.
"""

import re
from typing import Optional

from resume_pipeline.data.models import CertificationEntry
from resume_pipeline.nlp.preprocessor import find_section
from resume_pipeline.nlp.ruleset import EntryPatterns, SectionAliases
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


class CertificationsParser:
    """Parser for extracting certifications from resume text."""

    def __init__(
        self,
        aliases: Optional[SectionAliases] = None,
        patterns: Optional[EntryPatterns] = None,
    ):
        self.aliases = aliases or SectionAliases()
        self._patterns = [
            re.compile(p, re.IGNORECASE)
            for p in (patterns or EntryPatterns()).certifications
        ]

    def parse(self, text: str) -> list[CertificationEntry]:
        """
        At most one certification per pattern, in pattern order.

        Patterns run over the whole section; a name may continue onto the
        following line.
        """
        section = find_section(text, self.aliases.certifications)
        if not section:
            return []

        certifications = []
        for pattern in self._patterns:
            match = pattern.search(section)
            if match:
                certifications.append(CertificationEntry(name=match.group(0).strip()))

        logger.debug(f"Found {len(certifications)} certifications")
        return certifications
