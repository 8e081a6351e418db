"""Unit tests for text sanitization and reference validation."""

import pytest
from loguru import logger

from vitae.contexts.editing.resume_data_structure import Reference
from vitae.contexts.rendering.sanitizer import (
    MISSING_REFERENCE_NAME,
    clean,
    is_valid_email,
    is_valid_name,
    strip_leading_bullet,
    to_printable,
    validate_reference,
)


@pytest.fixture
def captured_warnings():
    messages = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="WARNING")
    yield messages
    logger.remove(sink_id)


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, 42, ["a"], {"a": 1}])
def test_clean_non_strings_become_empty(value):
    assert clean(value) == ""


@pytest.mark.unit
def test_clean_collapses_whitespace():
    assert clean("  Hello\t\n  World  ") == "Hello World"


@pytest.mark.unit
def test_clean_decomposes_accents():
    assert clean("José Müller") == "Jose Muller"


@pytest.mark.unit
def test_clean_removes_bullets_and_dashes():
    assert clean("• Led team") == "Led team"
    assert clean("▸ full-stack ● dev") == "fullstack dev"


@pytest.mark.unit
def test_clean_drops_non_ascii():
    assert clean("日本 Tokyo") == "Tokyo"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text", ["  José • résumé  ", "a b", "ﬁle – name", "---", "Plain text", "日本"]
)
def test_clean_is_idempotent(text):
    once = clean(text)
    assert clean(once) == once


@pytest.mark.unit
def test_clean_debug_warns_when_emptied(captured_warnings):
    assert clean("日本語", debug=True) == ""
    assert any("empty output" in message for message in captured_warnings)


@pytest.mark.unit
def test_clean_debug_warns_on_suspicious_characters(captured_warnings):
    clean("Tom & Jerry", debug=True)
    assert any("suspicious" in message for message in captured_warnings)


@pytest.mark.unit
def test_clean_without_debug_is_silent(captured_warnings):
    clean("日本語")
    assert captured_warnings == []


@pytest.mark.unit
def test_to_printable_keeps_hyphens():
    assert to_printable("Object-Oriented Design – 2") == "Object-Oriented Design 2"


@pytest.mark.unit
def test_strip_leading_bullet():
    assert strip_leading_bullet("  - • Shipped v2") == "Shipped v2"
    assert strip_leading_bullet("Shipped v2 - fast") == "Shipped v2 - fast"


@pytest.mark.unit
@pytest.mark.parametrize(
    "email,valid",
    [
        ("jane@example.com", True),
        ("jane.doe@mail.example.org", True),
        ("jane@example", False),
        ("jane example@x.com", False),
        ("@example.com", False),
        ("", False),
    ],
)
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,valid",
    [("Jo", True), ("J", False), ("12", False), ("Dr. Smith", True), ("x" * 100, False)],
)
def test_is_valid_name(name, valid):
    assert is_valid_name(name) is valid


@pytest.mark.unit
def test_validate_reference_replaces_invalid_fields():
    original = Reference(id=1, name="", email="not-an-email", title="Manager")
    validated = validate_reference(original)

    assert validated.name == MISSING_REFERENCE_NAME
    assert validated.email == ""
    assert validated.title == "Manager"
    # Input untouched
    assert original.name == ""
    assert original.email == "not-an-email"


@pytest.mark.unit
def test_validate_reference_keeps_valid_fields():
    validated = validate_reference(
        Reference(name="Dr. Alan Smith", email="alan@example.com", company="Acme")
    )
    assert validated.name == "Dr. Alan Smith"
    assert validated.email == "alan@example.com"
    assert validated.company == "Acme"


@pytest.mark.unit
def test_clean_output_is_plain_ascii():
    cleaned = clean("Résumé • Summary")
    assert cleaned == "Resume Summary"
    assert all(" " <= char <= "~" for char in cleaned)
