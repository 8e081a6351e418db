"""
Unit tests for the drafting assistant.

All calls go to a fake provider; no network access.
"""

import pytest

from vitae.contexts.drafting import DraftingAssistant, generate_text
from vitae.contexts.editing.resume_data_structure import Education, PersonalInfo
from vitae.exceptions import (
    GenerationFailedError,
    MissingCredentialError,
    MissingRequiredFieldError,
)


def make_assistant(fake_provider, *replies, error=None, api_key="test-key"):
    provider = fake_provider(replies=replies, error=error)
    return DraftingAssistant(api_key=api_key, provider_name="gemini", provider=provider), provider


class TestGenerateText:
    """Tests for generate_text."""

    @pytest.mark.unit
    def test_returns_trimmed_reply(self, fake_provider):
        provider = fake_provider(replies=["  Drafted text \n"])
        assert generate_text("prompt", "key", provider=provider) == "Drafted text"
        assert provider.prompts == ["prompt"]

    @pytest.mark.unit
    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_key_makes_no_call(self, fake_provider, api_key):
        provider = fake_provider(replies=["unused"])
        with pytest.raises(MissingCredentialError):
            generate_text("prompt", api_key, provider_name="gemini", provider=provider)
        assert provider.prompts == []

    @pytest.mark.unit
    def test_provider_error_is_wrapped(self, fake_provider):
        error = RuntimeError("quota exceeded")
        provider = fake_provider(error=error)
        with pytest.raises(GenerationFailedError) as exc_info:
            generate_text("prompt", "key", provider=provider, task="summary")
        assert exc_info.value.original_error is error
        assert "Failed to generate summary" in str(exc_info.value)

    @pytest.mark.unit
    def test_empty_reply_fails(self, fake_provider):
        provider = fake_provider(replies=["   "])
        with pytest.raises(GenerationFailedError, match="No content received"):
            generate_text("prompt", "key", provider=provider)

    @pytest.mark.unit
    def test_unknown_provider_is_wrapped(self):
        with pytest.raises(GenerationFailedError):
            generate_text("prompt", "key", provider_name="nonexistent")


class TestSummary:
    """Tests for summary drafting."""

    @pytest.mark.unit
    def test_needs_name_or_job(self, fake_provider):
        assistant, provider = make_assistant(fake_provider, "unused")
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assistant.generate_summary(PersonalInfo(), "  ")
        assert exc_info.value.field == "personal.fullName"
        assert provider.prompts == []

    @pytest.mark.unit
    def test_targets_job_description(self, fake_provider):
        assistant, provider = make_assistant(fake_provider, "Targeted summary")
        result = assistant.generate_summary(PersonalInfo(), "Senior data engineer, Kafka")
        assert result == "Targeted summary"
        assert "Senior data engineer, Kafka" in provider.prompts[0]

    @pytest.mark.unit
    def test_general_summary_uses_name(self, fake_provider):
        assistant, provider = make_assistant(fake_provider, "General summary")
        assistant.generate_summary(PersonalInfo(full_name="Jane Doe"))
        assert "Jane Doe" in provider.prompts[0]

    @pytest.mark.unit
    def test_enhance_needs_summary(self, fake_provider):
        assistant, _ = make_assistant(fake_provider)
        with pytest.raises(MissingRequiredFieldError):
            assistant.enhance_summary("")

    @pytest.mark.unit
    def test_missing_key(self, fake_provider):
        assistant, provider = make_assistant(fake_provider, "unused", api_key="")
        with pytest.raises(MissingCredentialError):
            assistant.enhance_summary("Existing summary")
        assert provider.prompts == []


class TestEducation:
    """Tests for education drafting."""

    @pytest.mark.unit
    def test_degree_required(self, fake_provider):
        assistant, _ = make_assistant(fake_provider)
        with pytest.raises(MissingRequiredFieldError, match="Please enter a degree first"):
            assistant.generate_courses(Education(school="State University"))
        with pytest.raises(MissingRequiredFieldError):
            assistant.generate_education_description(Education(degree="  "))

    @pytest.mark.unit
    def test_courses_normalized(self, fake_provider):
        assistant, provider = make_assistant(fake_provider, "Algorithms ,Databases,, Compilers ")
        courses = assistant.generate_courses(Education(degree="BSc Computer Science"))
        assert courses == "Algorithms, Databases, Compilers"
        assert "BSc Computer Science" in provider.prompts[0]

    @pytest.mark.unit
    def test_description(self, fake_provider):
        assistant, _ = make_assistant(fake_provider, "Studied distributed systems.")
        result = assistant.generate_education_description(Education(degree="MSc Data Science"))
        assert result == "Studied distributed systems."


class TestSuggestSkills:
    """Tests for skill suggestions."""

    @pytest.mark.unit
    def test_needs_role_or_job(self, fake_provider):
        assistant, _ = make_assistant(fake_provider)
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assistant.suggest_skills(["Python"], "", "")
        assert exc_info.value.field == "jobDescription"

    @pytest.mark.unit
    def test_filters_duplicates_and_unknown_values(self, fake_provider):
        reply = """```json
        [
            {"name": "python", "level": "Expert", "category": "Technical"},
            {"name": "Airflow", "level": "Advanced", "category": "Tool"},
            {"name": "airflow", "level": "Advanced", "category": "Tool"},
            {"name": "Spark", "level": "Guru", "category": "Technical"},
            {"name": "Mentoring", "level": "Intermediate", "category": "Hobby"},
            "dbt",
            {"name": "Communication", "level": "Advanced", "category": "Soft"}
        ]
        ```"""
        assistant, _ = make_assistant(fake_provider, reply)

        suggestions = assistant.suggest_skills(["Python"], "Data Engineer")

        assert [s.name for s in suggestions] == ["Airflow", "Communication"]
        assert suggestions[0].level == "Advanced"
        assert suggestions[0].category == "Tool"

    @pytest.mark.unit
    def test_unparseable_reply(self, fake_provider):
        assistant, _ = make_assistant(fake_provider, "Python, SQL, Docker")
        with pytest.raises(GenerationFailedError):
            assistant.suggest_skills([], "Data Engineer")


class TestSuggestInterests:
    """Tests for interest suggestions."""

    @pytest.mark.unit
    def test_dedupes_and_caps(self, fake_provider):
        reply = (
            "Chess, Hiking, chess, Open Source Contribution, "
            "A very long interest name that exceeds the limit, "
            "Cooking, Photography, Running, Volunteering, Reading"
        )
        assistant, provider = make_assistant(fake_provider, reply)

        suggestions = assistant.suggest_interests(["Chess"])

        assert suggestions == [
            "Hiking",
            "Open Source Contribution",
            "Cooking",
            "Photography",
            "Running",
            "Volunteering",
        ]
        assert "Chess" in provider.prompts[0]
