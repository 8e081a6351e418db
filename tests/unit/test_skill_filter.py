"""
Unit tests for list preparation used by the section renderers.

Covers the skill-name heuristic, coursework parsing and language pairing.
"""

import pytest

from vitae.contexts.editing.resume_data_structure import Language, SkillSet
from vitae.contexts.rendering.sections import (
    is_valid_skill,
    parse_courses,
    prepare_languages,
    prepare_skills,
)


class TestIsValidSkill:
    """Tests for is_valid_skill."""

    @pytest.mark.unit
    @pytest.mark.parametrize("skill", ["AI", "ML", "AWS"])
    def test_acronyms_always_pass(self, skill):
        assert is_valid_skill(skill)

    @pytest.mark.unit
    def test_short_names_rejected(self):
        assert not is_valid_skill("Go")
        assert not is_valid_skill("c")

    @pytest.mark.unit
    @pytest.mark.parametrize("skill", ["early", "Looking", "Public", "stage"])
    def test_stoplist_rejected(self, skill):
        assert not is_valid_skill(skill)

    @pytest.mark.unit
    @pytest.mark.parametrize("skill", ["sql", "AutoCAD", "JavaScript", "linux admin"])
    def test_technical_names_pass(self, skill):
        assert is_valid_skill(skill)

    @pytest.mark.unit
    def test_lowercase_length_rule(self):
        assert not is_valid_skill("team")
        assert is_valid_skill("teamwork")
        assert is_valid_skill("Team")


@pytest.mark.unit
def test_prepare_skills_filters_capitalizes_and_sorts():
    skills = SkillSet.simple(["python", "AI", "go", "  ", "early", "docker"])
    assert prepare_skills(skills) == ["AI", "Docker", "Python"]


@pytest.mark.unit
def test_prepare_skills_sorts_case_insensitively():
    skills = SkillSet.simple(["kubernetes", "Ansible", "bash scripting"])
    assert prepare_skills(skills) == ["Ansible", "Bash scripting", "Kubernetes"]


@pytest.mark.unit
def test_parse_courses_trims_sorts_and_keeps_duplicates():
    assert parse_courses("b, a, B, , a") == ["a", "a", "b", "B"]


@pytest.mark.unit
def test_parse_courses_empty():
    assert parse_courses("") == []
    assert parse_courses(" , ,") == []


@pytest.mark.unit
def test_parse_courses_keeps_hyphens():
    assert parse_courses("Object-Oriented Design") == ["Object-Oriented Design"]


@pytest.mark.unit
def test_prepare_languages_drops_incomplete_and_sorts():
    records = [
        Language(id=1, language="Spanish", proficiency="Fluent"),
        Language(id=2, language="english", proficiency="Native"),
        Language(id=3, language="French", proficiency=""),
        Language(id=4, language="", proficiency="Basic"),
    ]
    assert prepare_languages(records) == [("english", "Native"), ("Spanish", "Fluent")]


@pytest.mark.unit
def test_prepare_skills_drops_filler_words():
    skills = SkillSet.simple(["AI", "to", "a", "early", "JavaScript"])
    assert prepare_skills(skills) == ["AI", "JavaScript"]
