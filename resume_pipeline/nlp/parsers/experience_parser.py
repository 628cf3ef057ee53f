"""
Work experience parser for resumes.

Extracts job titles, companies and dates from the experience section.
"""

from typing import Optional

from resume_pipeline.data.models import WorkExperienceEntry
from resume_pipeline.nlp.preprocessor import extract_dates, find_section, split_into_entries
from resume_pipeline.nlp.ruleset import EntryPatterns, SectionAliases
from resume_pipeline.utils.constants import UNKNOWN_SENTINEL
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


class ExperienceParser:
    """Parser for extracting work experience from resume text."""

    def __init__(
        self,
        aliases: Optional[SectionAliases] = None,
        patterns: Optional[EntryPatterns] = None,
    ):
        self.aliases = aliases or SectionAliases()
        self.patterns = patterns or EntryPatterns()

    def parse(self, text: str) -> list[WorkExperienceEntry]:
        """
        Parse work experience entries from resume text.

        Returns an empty list when there is no experience section.
        """
        section = find_section(text, self.aliases.experience)
        if not section:
            logger.debug("No experience section found")
            return []

        experiences = []
        for entry in split_into_entries(section, self.patterns.min_entry_length):
            experience = self.parse_entry(entry)
            if experience:
                experiences.append(experience)

        logger.debug(f"Found {len(experiences)} work experience entries")
        return experiences

    def parse_entry(self, entry: str) -> Optional[WorkExperienceEntry]:
        """
        Parse one entry block.

        The first line is read as ``<title> at <company>`` or
        ``<title> - <company>``; otherwise line one is the title and line
        two the company. A field that cannot be resolved holds the
        ``"Unknown"`` sentinel. Returns None when neither was found.
        """
        lines = [line for line in entry.split("\n") if line.strip()]
        if not lines:
            return None

        title, company = self.split_title_company(lines[0], lines[1] if len(lines) > 1 else "")
        if not title and not company:
            return None

        dates = extract_dates(entry, self.patterns.date, self.patterns.current_marker)

        return WorkExperienceEntry(
            company=company or UNKNOWN_SENTINEL,
            title=title or UNKNOWN_SENTINEL,
            start_date=dates.start,
            end_date=dates.end,
            current=dates.current,
            description=entry,
        )

    def split_title_company(self, first_line: str, second_line: str = "") -> tuple[str, str]:
        """Return (title, company) from an entry's opening lines."""
        for separator in self.patterns.title_company_separators:
            if separator in first_line:
                parts = first_line.split(separator)
                return parts[0].strip(), parts[1].strip()
        return first_line.strip(), second_line.strip()
