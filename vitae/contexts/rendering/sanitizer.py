"""
Text sanitization for PDF output.

The built-in PDF fonts only cover printable ASCII reliably, so every piece of
user text is reduced to that range before it is drawn.
"""

import re
import unicodedata
from dataclasses import replace

from vitae.contexts.editing.resume_data_structure import Reference
from vitae.contexts.rendering.logger import _log_warning

BULLET_GLYPHS = "-•·‣▪▫▸▶●"

_WHITESPACE_RUN = re.compile(r"\s+")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")
_BULLETS = re.compile(f"[{re.escape(BULLET_GLYPHS)}]")
_LEADING_BULLETS = re.compile(f"^[{re.escape(BULLET_GLYPHS)}\\s]*")
_SUSPICIOUS = re.compile(r"[^A-Za-z0-9@._\s-]")

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LETTER = re.compile(r"[A-Za-z]")

MISSING_REFERENCE_NAME = "Reference Name Not Provided"


def to_printable(text) -> str:
    """
    Reduce text to printable ASCII, keeping punctuation and hyphens.

    Compatibility characters are decomposed first so accented letters keep
    their base letter.
    """
    if not isinstance(text, str):
        return ""
    text = unicodedata.normalize("NFKD", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    text = _NON_PRINTABLE.sub("", text)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def clean(text, debug: bool = False) -> str:
    """
    Sanitize arbitrary input for drawing.

    Non-strings become "". Bullet and dash glyphs (including the ASCII
    hyphen) are removed. The result is trimmed with single spaces and
    clean(clean(x)) == clean(x).

    Args:
        text: Any value
        debug: Log a warning when a non-empty input is emptied or unusual
            characters survive
    """
    if not isinstance(text, str):
        return ""

    cleaned = to_printable(text)
    cleaned = _BULLETS.sub("", cleaned)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned).strip()

    if debug:
        if text.strip() and not cleaned:
            _log_warning(f"clean: input {text!r} resulted in empty output")
        elif _SUSPICIOUS.search(cleaned):
            _log_warning(f"clean: suspicious characters in {cleaned!r} from input {text!r}")

    return cleaned


def strip_leading_bullet(line: str) -> str:
    """Remove bullet/dash glyphs and whitespace at the start of a line."""
    return _LEADING_BULLETS.sub("", line).strip()


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL.match(value or ""))


def is_valid_name(value: str) -> bool:
    """Names are 2-99 characters and contain at least one ASCII letter."""
    value = value or ""
    return 1 < len(value) < 100 and bool(_LETTER.search(value))


def validate_reference(reference: Reference) -> Reference:
    """
    Return a display-safe copy of a reference.

    A missing or invalid name is replaced by a placeholder and an invalid
    email is dropped. The input is not mutated.
    """
    name = clean(reference.name)
    if not is_valid_name(name):
        _log_warning(f"Invalid reference name {reference.name!r}, using placeholder")
        name = MISSING_REFERENCE_NAME

    email = clean(reference.email)
    if email and not is_valid_email(email):
        _log_warning(f"Invalid reference email {reference.email!r} dropped")
        email = ""

    return replace(
        reference,
        name=name,
        email=email,
        title=clean(reference.title),
        company=clean(reference.company),
        relationship=clean(reference.relationship),
        phone=clean(reference.phone),
    )
