"""
Resume section parsers for extracting structured information.

Each parser is responsible for extracting one type of information from
resume text (contact info, experience, education, skills, etc.).
"""

from .contact_parser import ContactParser
from .experience_parser import ExperienceParser
from .education_parser import EducationParser
from .skills_parser import SkillsParser, compile_term
from .certifications_parser import CertificationsParser
from .summary_parser import SummaryParser

__all__ = [
    "ContactParser",
    "ExperienceParser",
    "EducationParser",
    "SkillsParser",
    "compile_term",
    "CertificationsParser",
    "SummaryParser",
]
