"""
Education parser for resumes.

Extracts institutions, degrees, fields of study, dates and GPA.
"""

import re
from typing import Optional

from resume_pipeline.data.models import EducationEntry
from resume_pipeline.nlp.preprocessor import extract_dates, find_section, split_into_entries
from resume_pipeline.nlp.ruleset import EntryPatterns, SectionAliases
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


class EducationParser:
    """Parser for extracting education entries from resume text."""

    def __init__(
        self,
        aliases: Optional[SectionAliases] = None,
        patterns: Optional[EntryPatterns] = None,
    ):
        self.aliases = aliases or SectionAliases()
        self.patterns = patterns or EntryPatterns()

        self._degrees = [re.compile(p, re.IGNORECASE) for p in self.patterns.degrees]
        self._institution = re.compile(self.patterns.institution, re.IGNORECASE)
        self._gpa = re.compile(self.patterns.gpa, re.IGNORECASE)

    def parse(self, text: str) -> list[EducationEntry]:
        """Parse education entries; empty when there is no education section."""
        section = find_section(text, self.aliases.education)
        if not section:
            logger.debug("No education section found")
            return []

        education = []
        for entry in split_into_entries(section, self.patterns.min_entry_length):
            parsed = self.parse_entry(entry)
            if parsed:
                education.append(parsed)

        logger.debug(f"Found {len(education)} education entries")
        return education

    def parse_entry(self, entry: str) -> Optional[EducationEntry]:
        """Parse one entry block. Entries without an institution are dropped."""
        lines = [line for line in entry.split("\n") if line.strip()]

        institution = self.extract_institution(lines)
        if not institution:
            return None

        degree, field = self.extract_degree(entry)
        dates = extract_dates(entry, self.patterns.date, self.patterns.current_marker)

        return EducationEntry(
            institution=institution,
            degree=degree,
            field=field,
            start_date=dates.start,
            end_date=dates.end,
            gpa=self.extract_gpa(entry),
        )

    def extract_degree(self, entry: str) -> tuple[Optional[str], Optional[str]]:
        """
        Match degree patterns in order (Bachelor, Master, PhD, Associate).

        Patterns run over the whole entry, so a field of study written as
        words may continue onto the next line.

        Returns:
            (degree, field); the degree is the whole matched phrase
        """
        for pattern in self._degrees:
            match = pattern.search(entry)
            if match:
                return match.group(0).strip() or None, match.group(1).strip() or None
        return None, None

    def extract_institution(self, lines: list[str]) -> Optional[str]:
        """First line naming a university/college/institute/school, else the first line."""
        for line in lines:
            if self._institution.search(line):
                return line.strip()
        return lines[0].strip() if lines else None

    def extract_gpa(self, entry: str) -> Optional[str]:
        match = self._gpa.search(entry)
        return match.group(1) if match else None
