"""
Tests for resume_pipeline.nlp.parsers.contact_parser - ContactParser.
"""

import pytest

from resume_pipeline.data.models import Location
from resume_pipeline.nlp.parsers.contact_parser import ContactParser
from resume_pipeline.nlp.ruleset import ContactPatterns


@pytest.fixture
def parser():
    return ContactParser()


class TestExtractEmail:
    def test_first_email(self, parser):
        text = "Contact: jane.doe@example.com or jd@work.org"
        assert parser.extract_email(text) == "jane.doe@example.com"

    def test_plus_addressing(self, parser):
        assert parser.extract_email("jane+jobs@mail.co") == "jane+jobs@mail.co"

    def test_missing(self, parser):
        assert parser.extract_email("no email here") is None


class TestExtractPhone:
    def test_us_dashed(self, parser):
        assert parser.extract_phone("Phone 555-123-4567") == "555-123-4567"

    def test_international_with_parentheses(self, parser):
        assert parser.extract_phone("+1 (555) 123-4567") == "+1 (555) 123-4567"

    def test_dotted(self, parser):
        assert parser.extract_phone("555.123.4567") == "555.123.4567"

    def test_whitespace_collapsed(self, parser):
        assert parser.extract_phone("555\t123\t4567") == "555 123 4567"

    def test_missing(self, parser):
        assert parser.extract_phone("call me maybe") is None


class TestProfileUrls:
    def test_linkedin_with_scheme(self, parser):
        text = "https://www.linkedin.com/in/jane-doe"
        assert parser.extract_linkedin_url(text) == "https://www.linkedin.com/in/jane-doe"

    def test_linkedin_is_case_insensitive(self, parser):
        assert parser.extract_linkedin_url("LinkedIn.com/in/jdoe") == "LinkedIn.com/in/jdoe"

    def test_linkedin_requires_profile_path(self, parser):
        assert parser.extract_linkedin_url("linkedin.com/company/acme") is None

    def test_github(self, parser):
        assert parser.extract_github_url("Code: github.com/janedoe") == "github.com/janedoe"

    def test_portfolio(self, parser):
        text = "Portfolio: https://janedoe.dev/work | linkedin.com/in/jane"
        assert parser.extract_portfolio_url(text) == "https://janedoe.dev/work"

    def test_portfolio_skips_excluded_domains(self, parser):
        text = "linkedin.com/in/jane github.com/jane google.com janedoe.io"
        assert parser.extract_portfolio_url(text) == "janedoe.io"

    def test_portfolio_none_when_only_excluded(self, parser):
        assert parser.extract_portfolio_url("linkedin.com/in/jane github.com/jane") is None

    def test_email_domain_reads_as_portfolio(self, parser):
        assert parser.extract_portfolio_url("jane@example.com") == "example.com"


class TestExtractName:
    def test_first_line(self, parser):
        assert parser.extract_name("Jane Doe\njane@example.com") == ("Jane", "Doe")

    def test_skips_contact_lines(self, parser):
        text = "jane@example.com\n555-123-4567\nhttp://janedoe.dev\nJane Q Doe"
        assert parser.extract_name(text) == ("Jane", "Doe")

    def test_middle_initial_is_not_capitalized_word(self, parser):
        assert parser.extract_name("Mary J Anne Smith") == ("Mary", "Smith")

    def test_single_word_line_skipped(self, parser):
        assert parser.extract_name("RESUME\nJohn Smith") == ("John", "Smith")

    def test_too_many_words(self, parser):
        assert parser.extract_name("Jane Alice Beth Carol Doe") is None

    def test_lowercase_words_rejected(self, parser):
        assert parser.extract_name("some lowercase words") is None

    def test_only_first_five_lines_scanned(self, parser):
        text = "a\nb\nc\nd\ne\nJane Doe"
        assert parser.extract_name(text) is None

    def test_scan_depth_from_patterns(self):
        parser = ContactParser(ContactPatterns(name_scan_lines=6))
        assert parser.extract_name("a\nb\nc\nd\ne\nJane Doe") == ("Jane", "Doe")


class TestExtractLocation:
    def test_city_state(self, parser):
        assert parser.extract_location("Austin, TX 78701") == Location(
            city="Austin", state="TX", country="USA"
        )

    def test_multi_word_city(self, parser):
        location = parser.extract_location("Based in San Francisco, CA")
        assert location.city == "San Francisco"
        assert location.state == "CA"

    def test_country_is_always_usa(self, parser):
        location = parser.extract_location("London, UK")
        assert location.country == "USA"

    def test_missing(self, parser):
        assert parser.extract_location("remote") is None


class TestParse:
    def test_sample_resume(self, parser, sample_resume_text):
        info = parser.parse(sample_resume_text)
        assert info.email == "jane.doe@example.com"
        assert info.first_name == "Jane"
        assert info.last_name == "Doe"
        assert info.phone == "555-123-4567"
        assert info.linkedin_url is None

    def test_detailed_resume(self, parser, detailed_resume_text):
        info = parser.parse(detailed_resume_text)
        assert info.email == "john.smith@gmail.com"
        assert info.phone == "(512) 555-0199"
        assert info.linkedin_url == "linkedin.com/in/johnsmith"
        assert info.github_url == "github.com/jsmith"
        assert info.location.city == "Austin"
        assert info.location.state == "TX"

    def test_empty_text(self, parser):
        assert parser.parse("").is_empty
