"""
Rulesets for entity extraction and confidence scoring.

All heuristics the pipeline depends on (skills taxonomy, section header
aliases, regular expressions, scoring weights and review thresholds) are
data, not code. The defaults below reproduce the production behaviour; a
JSON file with the same shape can replace any part of them so rules can be
tuned and tested without touching the algorithms.
"""

import math
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)


class FrozenRules(BaseModel):
    """Base for rule objects: immutable, unknown keys rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Entity extraction rules
# =============================================================================

DEFAULT_SKILLS_TAXONOMY: dict[str, list[str]] = {
    "programming_languages": [
        "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Ruby", "Go", "Rust", "PHP",
        "Swift", "Kotlin", "Scala", "R", "MATLAB", "Perl", "Shell", "Bash",
    ],
    "web_technologies": [
        "React", "Angular", "Vue.js", "Node.js", "Express", "Next.js", "Nuxt.js",
        "HTML", "CSS", "SASS", "LESS", "Tailwind", "Bootstrap",
        "REST API", "GraphQL", "WebSocket", "HTTP", "AJAX",
    ],
    "backend_databases": [
        "SQL", "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch",
        "Oracle", "SQL Server", "DynamoDB", "Cassandra", "Neo4j",
    ],
    "cloud_devops": [
        "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Jenkins", "GitLab CI",
        "GitHub Actions", "Terraform", "Ansible", "CloudFormation",
    ],
    "frameworks": [
        "Spring", "Django", "Flask", "FastAPI", "Rails", "Laravel", "NestJS",
        ".NET", "ASP.NET", "Entity Framework",
    ],
    "tools_methodologies": [
        "Git", "Agile", "Scrum", "Kanban", "JIRA", "Confluence",
        "TDD", "BDD", "CI/CD", "Microservices", "RESTful",
    ],
    "data_ai": [
        "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch", "Scikit-learn",
        "Pandas", "NumPy", "Data Analysis", "ETL", "Big Data", "Spark", "Hadoop",
    ],
    "mobile": [
        "iOS", "Android", "React Native", "Flutter", "Xamarin",
    ],
    "other": [
        "Linux", "Unix", "Windows", "MacOS", "Networking", "Security",
        "Testing", "Jest", "Mocha", "Pytest", "JUnit", "Selenium",
    ],
}


class SectionAliases(FrozenRules):
    """Header lines that open each resume section (matched case-insensitively)."""

    experience: list[str] = ["experience", "work history", "employment", "professional experience"]
    education: list[str] = ["education", "academic", "qualifications"]
    skills: list[str] = ["skills", "technical skills", "core competencies", "technologies"]
    certifications: list[str] = ["certifications", "certificates", "licenses"]
    summary: list[str] = ["summary", "profile", "objective", "about"]


class ContactPatterns(FrozenRules):
    """Regular expressions for contact details."""

    email: str = r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"
    phone: str = r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"
    # Lines containing this are never taken as the candidate's name
    name_phone_guard: str = r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}"
    linkedin: str = r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+"
    github: str = r"(?:https?://)?(?:www\.)?github\.com/[\w-]+"
    website: str = r"(?:https?://)?(?:www\.)?[\w-]+\.(?:com|net|org|io|dev)(?:/[\w-]*)?"
    location: str = r"([A-Z][a-z]+(?:\s[A-Z][a-z]+)*),\s*([A-Z]{2})"
    portfolio_excluded_domains: list[str] = ["linkedin.com", "github.com", "google.com", "facebook.com"]
    # Country reported for every City, ST match; non-US resumes get this wrong
    location_country: str = "USA"
    name_scan_lines: int = 5


class EntryPatterns(FrozenRules):
    """Regular expressions for work, education and certification entries."""

    date: str = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{4}|\d{4}|\d{1,2}/\d{4}"
    current_marker: str = r"present|current|now"
    title_company_separators: list[str] = [" at ", " - "]
    degrees: list[str] = [
        r"(?:Bachelor|B\.?S\.?|B\.?A\.?|BA|BS)(?:\s+of\s+(?:Science|Arts))?\s+in\s+([\w\s]+)",
        r"(?:Master|M\.?S\.?|M\.?A\.?|MBA|MS|MA)(?:\s+of\s+(?:Science|Arts|Business Administration))?\s+in\s+([\w\s]+)",
        r"(?:Ph\.?D\.?|PhD|Doctorate)\s+in\s+([\w\s]+)",
        r"(?:Associate|A\.?S\.?|A\.?A\.?)(?:\s+of\s+(?:Science|Arts))?\s+in\s+([\w\s]+)",
    ]
    institution: str = r"University|College|Institute|School"
    gpa: str = r"GPA:?\s*([\d.]+)"
    certifications: list[str] = [
        r"AWS Certified[\w\s-]+",
        r"Microsoft Certified[\w\s-]+",
        r"Google Cloud[\w\s-]+",
        r"PMP",
        r"CISSP",
        r"CompTIA[\w\s+]+",
    ]
    # Fragments at or below this length are not treated as entries
    min_entry_length: int = 20
    summary_max_length: int = 500


class ParsingRuleset(FrozenRules):
    """Rules consumed by the entity extractor."""

    skills_taxonomy: dict[str, list[str]] = Field(default_factory=lambda: dict(DEFAULT_SKILLS_TAXONOMY))
    sections: SectionAliases = Field(default_factory=SectionAliases)
    contact: ContactPatterns = Field(default_factory=ContactPatterns)
    entries: EntryPatterns = Field(default_factory=EntryPatterns)

    @property
    def skill_terms(self) -> list[str]:
        """Taxonomy terms in taxonomy order, duplicates removed."""
        seen: set[str] = set()
        terms = []
        for category_terms in self.skills_taxonomy.values():
            for term in category_terms:
                if term.lower() not in seen:
                    seen.add(term.lower())
                    terms.append(term)
        return terms


# =============================================================================
# Confidence scoring rules
# =============================================================================


class SectionWeights(FrozenRules):
    """Contribution of each section to the overall confidence. Must sum to 1."""

    personal_info: float = 0.30
    work_experience: float = 0.35
    education: float = 0.20
    skills: float = 0.15

    @model_validator(mode="after")
    def check_sum(self) -> "SectionWeights":
        total = self.personal_info + self.work_experience + self.education + self.skills
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Section weights must sum to 1.0, got {total}")
        return self


class ReviewThresholds(FrozenRules):
    """Policy constants for the manual review decision and the quality report."""

    overall: float = 0.6
    critical_section_floor: float = 0.3
    low_confidence_report: float = 0.5
    limited_skills_count: int = 5

    @field_validator("overall", "critical_section_floor", "low_confidence_report")
    @classmethod
    def in_unit_interval(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("Thresholds must lie in [0, 1]")
        return v


class ScoringRules(FrozenRules):
    """Rules consumed by the confidence scorer."""

    weights: SectionWeights = Field(default_factory=SectionWeights)
    review: ReviewThresholds = Field(default_factory=ReviewThresholds)

    # Defaults for empty sections
    empty_work_experience_score: float = 0.3
    empty_education_score: float = 0.5
    empty_skills_score: float = 0.2

    # Work experience volume bonus
    experience_bonus_per_entry: float = 0.05
    experience_bonus_cap: float = 0.15
    description_min_length: int = 50

    # Skills curve
    skills_full_count: int = 9
    skills_mid_count: int = 4
    skills_mid_base: float = 0.6
    skills_mid_step: float = 0.08
    skills_low_base: float = 0.2
    skills_low_step: float = 0.13


class Ruleset(FrozenRules):
    """Complete set of rules for one pipeline instance."""

    parsing: ParsingRuleset = Field(default_factory=ParsingRuleset)
    scoring: ScoringRules = Field(default_factory=ScoringRules)

    @classmethod
    def from_file(cls, path: str | Path) -> "Ruleset":
        """Load a ruleset from JSON; omitted keys keep their defaults."""
        path = Path(path)
        logger.info(f"Loading ruleset from {path}")
        return cls.model_validate_json(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=1)
def default_ruleset() -> Ruleset:
    """The built-in ruleset."""
    return Ruleset()


def load_ruleset(path: Optional[str | Path] = None) -> Ruleset:
    """Load the ruleset at ``path``, or the built-in one when no path is given."""
    if path is None:
        return default_ruleset()
    return Ruleset.from_file(path)
