"""
Confidence scoring for parsed resumes.

Scores how trustworthy each extracted section is, decides whether a human
must review the result, and produces a descriptive quality report. Scoring
never raises; every input, including an empty one, yields a valid score.
"""

import math
import re
from typing import Optional

from resume_pipeline.data.models import (
    Confidence,
    EducationEntry,
    ExtractedEntities,
    PersonalInfo,
    QualityReport,
    WorkExperienceEntry,
)
from resume_pipeline.nlp.ruleset import ScoringRules, default_ruleset
from resume_pipeline.utils.constants import UNKNOWN_SENTINEL
from resume_pipeline.utils.logger import LoggerMixin

_VALID_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return _VALID_EMAIL.match(email) is not None


def round_score(value: float) -> float:
    """
    Round to 2 decimals with ties going up (0.595 -> 0.6, 0.125 -> 0.13).

    The 1e-9 tolerance absorbs binary error in sums such as
    0.3 * 0.81 + 0.35 * 0.52 that are meant to land on a tie.
    """
    return math.floor(value * 100 + 0.5 + 1e-9) / 100


class ConfidenceScorer(LoggerMixin):
    """
    Rule-based confidence scorer.

    Section scores are completeness ratios in [0, 1]. The overall score is
    the weighted sum of the rounded section scores:

        overall = 0.30 * personal_info + 0.35 * work_experience
                + 0.20 * education + 0.15 * skills

    Weights and thresholds come from ``ScoringRules``.
    """

    def __init__(self, rules: Optional[ScoringRules] = None):
        self.rules = rules or default_ruleset().scoring

    # =========================================================================
    # Scores
    # =========================================================================

    def score(self, entities: ExtractedEntities) -> Confidence:
        """
        Calculate confidence scores for extracted entities.

        Args:
            entities: Output of the entity extractor

        Returns:
            Confidence with every value rounded to 2 decimals
        """
        personal_info = round_score(self.score_personal_info(entities.personal_info))
        work_experience = round_score(self.score_work_experience(entities.work_experience))
        education = round_score(self.score_education(entities.education))
        skills = round_score(self.score_skills(entities.skills))

        weights = self.rules.weights
        overall = (
            personal_info * weights.personal_info
            + work_experience * weights.work_experience
            + education * weights.education
            + skills * weights.skills
        )
        overall = round_score(min(max(overall, 0.0), 1.0))

        self.logger.info(
            f"Confidence scores - Overall: {overall:.2f}, Personal: {personal_info:.2f}, "
            f"Experience: {work_experience:.2f}, Education: {education:.2f}, Skills: {skills:.2f}"
        )

        return Confidence(
            overall=overall,
            personal_info=personal_info,
            work_experience=work_experience,
            education=education,
            skills=skills,
        )

    def score_personal_info(self, info: Optional[PersonalInfo]) -> float:
        """Completeness of contact details (email and name weigh most)."""
        if info is None or info.is_empty:
            return 0.0

        score = 0
        max_score = 0

        # Email - 30 points, +5 for a well-formed address
        max_score += 30
        if info.email:
            score += 30
            if is_valid_email(info.email):
                score += 5
                max_score += 5

        # Name - 30 points, half for a single part
        max_score += 30
        if info.first_name and info.last_name:
            score += 30
        elif info.first_name or info.last_name:
            score += 15

        # Phone - 20 points
        max_score += 20
        if info.phone:
            score += 20

        # Location - 10 points
        max_score += 10
        if info.location and (info.location.city or info.location.state):
            score += 10

        # LinkedIn - 10 points
        max_score += 10
        if info.linkedin_url:
            score += 10

        return score / max_score

    def score_work_experience(self, experiences: list[WorkExperienceEntry]) -> float:
        """Average entry completeness plus a small bonus for several entries."""
        if not experiences:
            # Entry-level candidates may have no experience section
            return self.rules.empty_work_experience_score

        total = 0.0
        for exp in experiences:
            exp_score = 0
            if exp.company and exp.company != UNKNOWN_SENTINEL:
                exp_score += 30
            if exp.title and exp.title != UNKNOWN_SENTINEL:
                exp_score += 30
            if exp.start_date:
                exp_score += 15
            if exp.end_date or exp.current:
                exp_score += 10
            if len(exp.description) > self.rules.description_min_length:
                exp_score += 15
            elif exp.description:
                exp_score += 7
            total += exp_score / 100

        average = total / len(experiences)
        bonus = min(len(experiences) * self.rules.experience_bonus_per_entry, self.rules.experience_bonus_cap)
        return min(average + bonus, 1.0)

    def score_education(self, education: list[EducationEntry]) -> float:
        """Average entry completeness; no education is neutral."""
        if not education:
            return self.rules.empty_education_score

        total = 0.0
        for edu in education:
            edu_score = 0
            if edu.institution:
                edu_score += 40
            if edu.degree:
                edu_score += 30
            if edu.field:
                edu_score += 20
            if edu.start_date or edu.end_date:
                edu_score += 10
            total += edu_score / 100

        return total / len(education)

    def score_skills(self, skills: list[str]) -> float:
        """
        Score by number of skills found.

        0 -> 0.2, 1-3 -> 0.2 + 0.13n, 4-8 -> 0.6 + 0.08(n - 4), 9+ -> 1.0.
        Non-decreasing in n.
        """
        rules = self.rules
        count = len(skills)
        if count == 0:
            return rules.empty_skills_score
        if count >= rules.skills_full_count:
            return 1.0
        if count >= rules.skills_mid_count:
            return rules.skills_mid_base + (count - rules.skills_mid_count) * rules.skills_mid_step
        return rules.skills_low_base + count * rules.skills_low_step

    # =========================================================================
    # Review decision
    # =========================================================================

    def needs_review(self, confidence: Confidence) -> bool:
        """
        Decide whether a human must verify the parse.

        True when the overall score is below the review threshold, or when
        personal info or work experience falls below the critical floor.
        """
        review = self.rules.review

        if confidence.overall < review.overall:
            self.logger.warning(
                f"Low confidence score ({confidence.overall}), flagging for manual review"
            )
            return True

        if (
            confidence.personal_info < review.critical_section_floor
            or confidence.work_experience < review.critical_section_floor
        ):
            self.logger.warning("Critical section has very low confidence, flagging for manual review")
            return True

        return False

    # =========================================================================
    # Quality report
    # =========================================================================

    def quality_report(self, entities: ExtractedEntities, confidence: Confidence) -> QualityReport:
        """Describe what was found and what is missing, for human readers."""
        issues: list[str] = []
        suggestions: list[str] = []
        strengths: list[str] = []

        info = entities.personal_info

        if not info.email:
            issues.append("Email address not found")
            suggestions.append("Verify email address is present in the resume")
        else:
            strengths.append("Email address extracted successfully")

        if not info.first_name or not info.last_name:
            issues.append("Full name not clearly identified")
            suggestions.append("Ensure name is prominently displayed at the top of resume")
        else:
            strengths.append("Full name extracted successfully")

        if not info.phone:
            suggestions.append("Phone number not found - consider adding if available")

        experiences = entities.work_experience
        if not experiences:
            issues.append("No work experience found")
            suggestions.append("Verify work experience section is present and properly formatted")
        else:
            strengths.append(f"{len(experiences)} work experience entries found")
            missing_dates = [
                exp for exp in experiences
                if not exp.start_date or (not exp.end_date and not exp.current)
            ]
            if missing_dates:
                suggestions.append(f"{len(missing_dates)} work experiences missing dates")

        if not entities.education:
            suggestions.append("No education information found")
        else:
            strengths.append(f"{len(entities.education)} education entries found")

        skills = entities.skills
        if not skills:
            issues.append("No skills identified")
            suggestions.append("Add a skills section or mention technologies used in experience descriptions")
        elif len(skills) < self.rules.review.limited_skills_count:
            suggestions.append("Limited skills found - consider adding more technical skills")
        else:
            strengths.append(f"{len(skills)} skills identified")

        if confidence.overall < self.rules.review.low_confidence_report:
            issues.append("Overall parsing confidence is low")
            suggestions.append("Manual review recommended to verify extracted data")

        return QualityReport(issues=issues, suggestions=suggestions, strengths=strengths)
