"""
Professional summary parser for resumes.
"""

from typing import Optional

from resume_pipeline.nlp.preprocessor import find_section
from resume_pipeline.nlp.ruleset import EntryPatterns, SectionAliases


class SummaryParser:
    """Returns the opening of the summary/profile/objective section."""

    def __init__(
        self,
        aliases: Optional[SectionAliases] = None,
        patterns: Optional[EntryPatterns] = None,
    ):
        self.aliases = aliases or SectionAliases()
        self.max_length = (patterns or EntryPatterns()).summary_max_length

    def parse(self, text: str) -> Optional[str]:
        section = find_section(text, self.aliases.summary)
        if not section:
            return None
        return section[: self.max_length].strip() or None
