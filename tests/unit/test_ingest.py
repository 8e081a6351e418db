"""
Unit tests for the ingestion boundary.

Tests wire-format conversion, skill mode inference and malformed-data
coercion in vitae.contexts.editing.ingest.
"""

import json

import pytest

from vitae.contexts.editing import (
    SkillMode,
    SkillSet,
    document_from_dict,
    document_to_dict,
    load_document_file,
    save_document_file,
    skills_from_raw,
)
from vitae.contexts.editing.ingest import coerce_id, coerce_str, to_camel, to_snake


class TestSkillsFromRaw:
    """Tests for skill mode inference."""

    @pytest.mark.unit
    def test_enhanced_when_first_item_has_name_and_level(self):
        skills = skills_from_raw([{"name": "Python", "level": "Expert"}, {"name": "SQL", "level": ""}])
        assert skills.mode is SkillMode.ENHANCED
        assert skills.items[0].category == "Technical"
        assert skills.items[1].level == "Intermediate"

    @pytest.mark.unit
    def test_simple_keeps_strings_and_numbers(self):
        skills = skills_from_raw(["Python", 3, None, {"name": "x"}, True, ""])
        assert skills.mode is SkillMode.SIMPLE
        assert skills.names == ["Python", "3"]

    @pytest.mark.unit
    def test_json_string_is_decoded(self):
        skills = skills_from_raw('["Python", "SQL"]')
        assert skills.names == ["Python", "SQL"]

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [None, "not json", {"a": 1}, 42, []])
    def test_malformed_becomes_empty(self, raw):
        skills = skills_from_raw(raw)
        assert skills.mode is SkillMode.SIMPLE
        assert skills.items == []


@pytest.mark.unit
def test_name_conversion():
    assert to_camel("credential_id") == "credentialId"
    assert to_snake("verificationLink") == "verification_link"


@pytest.mark.unit
def test_coercion_helpers():
    assert coerce_str(None) == ""
    assert coerce_str(3.5) == "3.5"
    assert coerce_str(["a"]) == ""
    assert coerce_id("4", 1) == 4
    assert coerce_id(None, 2) == 2
    assert coerce_id(0, 3) == 3


@pytest.mark.unit
def test_document_from_dict_wire_names():
    document = document_from_dict(
        {
            "personal": {"fullName": "Jane Doe", "email": "jane@example.com"},
            "experience": [{"company": "Acme", "startDate": "2020-01"}],
            "certifications": [{"name": "CKA", "credentialId": "X1"}],
        }
    )
    assert document.personal.full_name == "Jane Doe"
    assert document.experience[0].start_date == "2020-01"
    assert document.certifications[0].credential_id == "X1"


@pytest.mark.unit
def test_missing_ids_follow_highest_existing_id():
    document = document_from_dict({"languages": [{"language": "Spanish"}, {"id": 7}, {}]})
    assert [lang.id for lang in document.languages] == [8, 7, 9]


@pytest.mark.unit
def test_missing_id_never_duplicates_later_explicit_id():
    document = document_from_dict(
        {"experience": [{"company": "A"}, {"id": 1, "company": "B"}]}
    )
    ids = [exp.id for exp in document.experience]
    assert ids == [2, 1]
    assert len(set(ids)) == len(ids)


@pytest.mark.unit
@pytest.mark.parametrize("raw_id", ["Infinity", "-inf", "nan", 1e400])
def test_non_finite_id_is_coerced(raw_id):
    assert coerce_id(raw_id, 5) == 5


@pytest.mark.unit
def test_infinite_id_from_stored_json_is_coerced():
    stored = json.loads('{"experience": [{"id": 1e400, "company": "Acme"}, {"id": "Infinity"}]}')
    document = document_from_dict(stored)
    assert [exp.id for exp in document.experience] == [1, 2]
    assert document.experience[0].company == "Acme"


@pytest.mark.unit
def test_relevant_courses_alias():
    document = document_from_dict({"education": [{"degree": "BSc", "relevantcourses": "Databases"}]})
    assert document.education[0].courses == "Databases"


@pytest.mark.unit
def test_malformed_document_coerced():
    document = document_from_dict(
        {
            "personal_info": '{"fullName": "Jane Doe"}',
            "experience": "not json",
            "education": [None, "text", {"school": 5}],
            "interests": ["Chess", None, "", 7],
            "projects": {"name": "x"},
        }
    )
    assert document.personal.full_name == "Jane Doe"
    assert document.experience == []
    assert len(document.education) == 3
    assert document.education[2].school == "5"
    assert document.interests == ["Chess", "7"]
    assert document.projects == []


@pytest.mark.unit
def test_non_dict_document():
    document = document_from_dict(None)
    assert document.personal.full_name == ""
    assert document.title == "Untitled Resume"


@pytest.mark.unit
def test_wire_round_trip_preserves_skill_mode(full_document):
    data = document_to_dict(full_document)
    assert data["skills"][0] == {"name": "Python", "level": "Expert", "category": "Technical"}

    restored = document_from_dict(json.loads(json.dumps(data)))
    assert restored == full_document


@pytest.mark.unit
def test_simple_skills_serialize_as_names(minimal_document):
    minimal_document.skills = SkillSet.simple(["Python", "SQL"])
    data = document_to_dict(minimal_document)
    assert data["skills"] == ["Python", "SQL"]
    assert data["personal"]["fullName"] == "Jane Doe"


@pytest.mark.unit
@pytest.mark.parametrize("suffix", [".json", ".yaml"])
def test_document_file_round_trip(tmp_path, full_document, suffix):
    path = save_document_file(full_document, tmp_path / f"resume{suffix}")
    assert load_document_file(path) == full_document


@pytest.mark.unit
def test_load_document_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_document_file(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_document_file(bad)
