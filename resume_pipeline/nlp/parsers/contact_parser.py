"""
Contact information parser for resumes.

Extracts names, emails, phone numbers, profile URLs and location.
"""

import re
from typing import Optional

from resume_pipeline.data.models import Location, PersonalInfo
from resume_pipeline.nlp.ruleset import ContactPatterns
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def _is_capitalized(word: str) -> bool:
    return len(word) > 1 and word[0] == word[0].upper()


class ContactParser:
    """Parser for extracting contact information from resume text."""

    def __init__(self, patterns: Optional[ContactPatterns] = None):
        self.patterns = patterns or ContactPatterns()

        self._email = re.compile(self.patterns.email)
        self._phone = re.compile(self.patterns.phone)
        self._name_phone_guard = re.compile(self.patterns.name_phone_guard)
        self._linkedin = re.compile(self.patterns.linkedin, re.IGNORECASE)
        self._github = re.compile(self.patterns.github, re.IGNORECASE)
        self._website = re.compile(self.patterns.website, re.IGNORECASE)
        self._location = re.compile(self.patterns.location)

    def parse(self, text: str) -> PersonalInfo:
        """
        Parse contact information from resume text.

        Args:
            text: Full normalized resume text

        Returns:
            PersonalInfo with whatever could be found; missing fields are None
        """
        name = self.extract_name(text)

        info = PersonalInfo(
            email=self.extract_email(text),
            phone=self.extract_phone(text),
            linkedin_url=self.extract_linkedin_url(text),
            github_url=self.extract_github_url(text),
            portfolio_url=self.extract_portfolio_url(text),
            first_name=name[0] if name else None,
            last_name=name[1] if name else None,
            location=self.extract_location(text),
        )

        logger.debug(
            f"Contact info: email={'yes' if info.email else 'no'}, "
            f"phone={'yes' if info.phone else 'no'}, name={'yes' if name else 'no'}"
        )
        return info

    def extract_email(self, text: str) -> Optional[str]:
        """First ``local@domain.tld`` in the text."""
        match = self._email.search(text)
        return match.group(0) if match else None

    def extract_phone(self, text: str) -> Optional[str]:
        """First phone-shaped number, whitespace runs collapsed."""
        match = self._phone.search(text)
        if not match:
            return None
        return _WHITESPACE_RUN.sub(" ", match.group(0)).strip()

    def extract_linkedin_url(self, text: str) -> Optional[str]:
        match = self._linkedin.search(text)
        return match.group(0) if match else None

    def extract_github_url(self, text: str) -> Optional[str]:
        match = self._github.search(text)
        return match.group(0) if match else None

    def extract_portfolio_url(self, text: str) -> Optional[str]:
        """
        First URL-like token that is not on an excluded domain.

        Email domains also look like URLs to this heuristic, so
        ``jane@example.com`` yields ``example.com``.
        """
        excluded = self.patterns.portfolio_excluded_domains
        for match in self._website.finditer(text):
            url = match.group(0)
            if not any(domain in url for domain in excluded):
                return url
        return None

    def extract_name(self, text: str) -> Optional[tuple[str, str]]:
        """
        Find the candidate's name near the top of the resume.

        Scans the first few lines, skipping any that contain an email,
        a phone number or a link. The first line of 2-4 words with at least
        two capitalized words gives the first and last of those words.

        Returns:
            (first_name, last_name) or None
        """
        for line in text.split("\n")[: self.patterns.name_scan_lines]:
            line = line.strip()

            if "@" in line or "http" in line or self._name_phone_guard.search(line):
                continue

            words = line.split()
            if not 2 <= len(words) <= 4:
                continue

            capitalized = [word for word in words if _is_capitalized(word)]
            if len(capitalized) >= 2:
                return capitalized[0], capitalized[-1]

        return None

    def extract_location(self, text: str) -> Optional[Location]:
        """
        First ``City, ST`` pair in the text.

        Every match is reported with the configured country (USA by
        default), including non-US resumes.
        """
        match = self._location.search(text)
        if not match:
            return None
        return Location(
            city=match.group(1),
            state=match.group(2),
            country=self.patterns.location_country,
        )
