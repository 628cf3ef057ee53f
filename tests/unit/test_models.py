"""
Tests for Pydantic data models in resume_pipeline.data.models.
"""

import pytest
from pydantic import ValidationError

from resume_pipeline.data.models import (
    CandidateCreate,
    Confidence,
    EducationEntry,
    ExtractedEntities,
    Location,
    ParsedResume,
    PersonalInfo,
    QualityReport,
    WorkExperienceEntry,
)


def _confidence(value=0.8):
    return Confidence(
        overall=value, personal_info=value, work_experience=value, education=value, skills=value
    )


class TestPersonalInfo:
    def test_empty(self):
        assert PersonalInfo().is_empty
        assert not PersonalInfo(location=Location(city="Austin")).is_empty

    def test_camel_case_wire(self):
        wire = PersonalInfo(first_name="Jane", linkedin_url="linkedin.com/in/jane").to_wire()
        assert wire["firstName"] == "Jane"
        assert wire["linkedinUrl"] == "linkedin.com/in/jane"
        assert wire["location"] is None

    def test_accepts_aliases(self):
        assert PersonalInfo(firstName="Jane").first_name == "Jane"

    def test_frozen(self):
        info = PersonalInfo(email="jane@example.com")
        with pytest.raises(ValidationError):
            info.email = "other@example.com"


class TestWorkExperienceEntry:
    def test_defaults_are_sentinels(self):
        entry = WorkExperienceEntry()
        assert entry.company == "Unknown"
        assert entry.title == "Unknown"
        assert entry.is_partial

    def test_partial_when_one_field_unknown(self):
        assert WorkExperienceEntry(title="Engineer").is_partial

    def test_complete(self):
        entry = WorkExperienceEntry(company="Acme", title="Engineer", start_date="2019", current=True)
        assert not entry.is_partial
        assert entry.to_wire()["startDate"] == "2019"


class TestEducationEntry:
    def test_institution_required(self):
        with pytest.raises(ValidationError):
            EducationEntry(degree="BS in Physics")


class TestConfidence:
    def test_bounds(self):
        with pytest.raises(ValidationError):
            _confidence(1.2)
        with pytest.raises(ValidationError):
            _confidence(-0.1)

    def test_edges_allowed(self):
        assert _confidence(0.0).overall == 0.0
        assert _confidence(1.0).overall == 1.0


class TestParsedResume:
    def _parsed(self, jobs):
        return ParsedResume(
            personal_info=PersonalInfo(),
            work_experience=jobs,
            raw_text="",
            confidence=_confidence(),
            needs_manual_review=False,
        )

    def test_current_job(self):
        jobs = [
            WorkExperienceEntry(company="Initech", title="Engineer"),
            WorkExperienceEntry(company="Globex", title="Lead", current=True),
        ]
        assert self._parsed(jobs).current_job.company == "Globex"

    def test_current_job_fallback(self):
        jobs = [WorkExperienceEntry(company="Initech", title="Engineer")]
        assert self._parsed(jobs).current_job.company == "Initech"

    def test_no_jobs(self):
        assert self._parsed([]).current_job is None

    def test_wire_keys(self):
        wire = self._parsed([]).to_wire()
        assert {"personalInfo", "workExperience", "rawText", "needsManualReview", "confidence"} <= set(wire)
        assert wire["confidence"]["personalInfo"] == 0.8


class TestExtractedEntities:
    def test_defaults(self):
        entities = ExtractedEntities()
        assert entities.personal_info.is_empty
        assert entities.skills == []
        assert entities.summary is None


class TestQualityReport:
    def test_defaults(self):
        report = QualityReport()
        assert (report.issues, report.suggestions, report.strengths) == ([], [], [])


class TestCandidateCreate:
    def test_defaults(self):
        candidate = CandidateCreate()
        assert candidate.source_type == "resume_upload"
        assert candidate.gdpr_consent is False
        assert candidate.tags == []

    def test_email_required_for_creation(self):
        assert not CandidateCreate(first_name="Jane").can_be_created
        assert CandidateCreate(email="jane@example.com").can_be_created

    def test_wire(self):
        wire = CandidateCreate(location_city="Austin", current_company="Acme").to_wire()
        assert wire["locationCity"] == "Austin"
        assert wire["currentCompany"] == "Acme"
