"""
Unit tests for the form state store.

Tests whole-section replacement and bullet formatting in
vitae.contexts.editing.form_store.
"""

import pytest

from vitae.contexts.editing import (
    Experience,
    Language,
    ResumeFormStore,
    Skill,
    SkillMode,
    SkillSet,
    format_with_bullets,
    next_id,
)


class TestFormatWithBullets:
    """Tests for format_with_bullets."""

    @pytest.mark.unit
    def test_adds_bullets_and_drops_blank_lines(self):
        assert format_with_bullets("Led team\n\n  Shipped v2  ") == "• Led team\n• Shipped v2"

    @pytest.mark.unit
    def test_keeps_existing_bullets(self):
        text = "- Cut costs\n• Hired four engineers\n▪ Ran on-call"
        assert format_with_bullets(text) == text

    @pytest.mark.unit
    def test_dash_without_space_gets_bullet(self):
        assert format_with_bullets("-Cut costs") == "• -Cut costs"

    @pytest.mark.unit
    def test_empty(self):
        assert format_with_bullets("") == ""


@pytest.mark.unit
def test_next_id():
    assert next_id([]) == 1
    assert next_id([Language(id=3), Language(id=7)]) == 8


@pytest.mark.unit
def test_update_experience_formats_and_assigns_ids():
    form = ResumeFormStore()
    form.update_experience(
        [Experience(company="Acme", description="Built it\nRan it"), Experience(id=9, company="Globex")]
    )

    experience = form.document.experience
    assert [exp.id for exp in experience] == [10, 9]
    assert experience[0].description == "• Built it\n• Ran it"
    assert experience[1].description == ""


@pytest.mark.unit
def test_filled_ids_do_not_collide_with_later_ids():
    form = ResumeFormStore()
    form.update_experience([Experience(company="A"), Experience(id=1, company="B")])
    assert [exp.id for exp in form.document.experience] == [2, 1]


@pytest.mark.unit
def test_filled_ids_are_sequential():
    form = ResumeFormStore()
    form.update_languages([Language(language="German"), Language(language="French")])
    assert [lang.id for lang in form.document.languages] == [1, 2]


@pytest.mark.unit
def test_update_replaces_whole_section(full_document):
    form = ResumeFormStore(full_document)
    form.update_languages([Language(language="German", proficiency="Basic")])
    assert [lang.language for lang in form.document.languages] == ["German"]


@pytest.mark.unit
def test_update_personal_merges_fields(full_document):
    form = ResumeFormStore(full_document)
    form.update_personal(summary="New summary")
    assert form.document.personal.summary == "New summary"
    assert form.document.personal.full_name == "Jane Doe"


@pytest.mark.unit
def test_add_interest_rejects_blank_and_duplicates():
    form = ResumeFormStore()
    assert form.add_interest(" Chess ") is True
    assert form.add_interest("Chess") is False
    assert form.add_interest("  ") is False
    assert form.document.interests == ["Chess"]


@pytest.mark.unit
def test_add_skill_keeps_mode(full_document):
    form = ResumeFormStore(full_document)
    form.add_skill(Skill(name="dbt", level="Beginner", category="Tool"))
    assert form.document.skills.mode is SkillMode.ENHANCED
    assert form.document.skills.names[-1] == "dbt"


@pytest.mark.unit
def test_merge_skills_case_insensitive():
    form = ResumeFormStore()
    form.update_skills(SkillSet.simple(["Python", "SQL"]))

    added = form.merge_skills(["python", "Docker", "docker", ""])

    assert added == ["Docker"]
    assert form.document.skills.names == ["Python", "SQL", "Docker"]
    assert form.document.skills.mode is SkillMode.SIMPLE


@pytest.mark.unit
def test_update_skills_copies_items():
    skill_set = SkillSet.simple(["Python"])
    form = ResumeFormStore()
    form.update_skills(skill_set)
    skill_set.items.append(Skill(name="SQL"))
    assert form.document.skills.names == ["Python"]
