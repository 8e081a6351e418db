"""
Ingestion boundary between external resume data and ResumeDocument.

External data (store rows, JSON files, API payloads) uses the camelCase field
names of the wire format ("fullName", "startDate", "credentialId", ...).
This module is the only place that:
- infers the skill representation mode from raw data
- coerces malformed values to per-field defaults

Nothing here raises on bad input: unexpected shapes become empty values.
"""

import json
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar

from omegaconf import OmegaConf

from vitae.contexts.editing.logger import _log_debug
from vitae.contexts.editing.resume_data_structure import (
    DEFAULT_SKILL_CATEGORY,
    DEFAULT_SKILL_LEVEL,
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    Reference,
    ResumeDocument,
    Skill,
    SkillMode,
    SkillSet,
    assign_missing_ids,
)

R = TypeVar("R")

# Record lists and their dataclass, in document order
RECORD_SECTIONS = {
    "experience": Experience,
    "education": Education,
    "projects": Project,
    "certifications": Certification,
    "languages": Language,
    "references": Reference,
}

# Alternate wire names accepted on input (wire name -> attribute)
FIELD_ALIASES = {
    Education: {"relevantcourses": "courses"},
}


def to_camel(name: str) -> str:
    """Convert snake_case attribute name to camelCase wire name."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_snake(name: str) -> str:
    """Convert camelCase wire name to snake_case attribute name."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def load_json_field(value: Any, default: Any) -> Any:
    """
    Decode a JSON-encoded field, passing through already-decoded values.

    Returns default when value is None or an unparsable string.
    """
    if value is None:
        return default
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            _log_debug(f"Unparsable JSON field coerced to default: {value[:60]!r}")
            return default
    return value


def coerce_str(value: Any) -> str:
    """Coerce a scalar to str; None, containers and booleans become ""."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def coerce_id(value: Any, fallback: int) -> int:
    """Coerce a record id to int, using fallback for missing or zero ids."""
    if isinstance(value, bool):
        return fallback
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return fallback
    return number or fallback


def record_from_dict(record_cls: Type[R], data: Any) -> R:
    """
    Build a section record from a wire dict.

    Missing or unusable ids come back as 0; records_from_raw fills them.

    Args:
        record_cls: Target dataclass (Experience, Education, ...)
        data: Raw record; non-dicts yield an empty record
    """
    if not isinstance(data, dict):
        data = {}

    aliases = FIELD_ALIASES.get(record_cls, {})
    values: Dict[str, Any] = {}
    for f in fields(record_cls):
        if f.name == "id":
            values["id"] = coerce_id(data.get("id"), 0)
            continue
        raw = data.get(to_camel(f.name), data.get(f.name))
        if raw is None:
            for alias, target in aliases.items():
                if target == f.name and data.get(alias):
                    raw = data[alias]
        values[f.name] = coerce_str(raw)

    return record_cls(**values)


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Convert a section record to its camelCase wire dict."""
    return {to_camel(f.name): getattr(record, f.name) for f in fields(record)}


def records_from_raw(record_cls: Type[R], raw: Any) -> List[R]:
    """Build a record list; anything that is not a list becomes []."""
    raw = load_json_field(raw, [])
    if not isinstance(raw, list):
        return []
    return assign_missing_ids(record_from_dict(record_cls, item) for item in raw)


def personal_from_raw(raw: Any) -> PersonalInfo:
    """Build PersonalInfo from a dict or JSON string."""
    data = load_json_field(raw, {})
    if not isinstance(data, dict):
        data = {}
    values = {
        f.name: coerce_str(data.get(to_camel(f.name), data.get(f.name)))
        for f in fields(PersonalInfo)
    }
    return PersonalInfo(**values)


def personal_to_dict(personal: PersonalInfo) -> Dict[str, str]:
    return {to_camel(f.name): getattr(personal, f.name) for f in fields(personal)}


def skills_from_raw(raw: Any) -> SkillSet:
    """
    Infer the skill representation from raw data.

    ENHANCED when the first element is a mapping carrying both "name" and
    "level"; missing level/category default to Intermediate/Technical.
    Otherwise SIMPLE: string and number items are kept (as str), everything
    else is dropped. Mixed-shape lists are not specially handled.
    """
    raw = load_json_field(raw, [])
    if not isinstance(raw, list) or not raw:
        return SkillSet()

    first = raw[0]
    if isinstance(first, dict) and "name" in first and "level" in first:
        skills = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            skills.append(
                Skill(
                    name=coerce_str(item.get("name")),
                    level=coerce_str(item.get("level")) or DEFAULT_SKILL_LEVEL,
                    category=coerce_str(item.get("category")) or DEFAULT_SKILL_CATEGORY,
                )
            )
        return SkillSet.enhanced(skills)

    names = [
        str(item)
        for item in raw
        if item and isinstance(item, (str, int, float)) and not isinstance(item, bool)
    ]
    return SkillSet.simple(names)


def skills_to_raw(skill_set: SkillSet) -> list:
    """SIMPLE -> list of names; ENHANCED -> list of {name, level, category}."""
    if skill_set.mode is SkillMode.ENHANCED:
        return [
            {"name": skill.name, "level": skill.level, "category": skill.category}
            for skill in skill_set.items
        ]
    return skill_set.names


def interests_from_raw(raw: Any) -> List[str]:
    raw = load_json_field(raw, [])
    if not isinstance(raw, list):
        return []
    return [coerce_str(item) for item in raw if coerce_str(item)]


def document_from_dict(data: Any) -> ResumeDocument:
    """
    Build a ResumeDocument from wire data, coercing malformed fields.

    Accepts both the document shape ("personal") and the stored row shape
    ("personal_info"); nested fields may be JSON-encoded strings.
    """
    if not isinstance(data, dict):
        data = {}

    personal_raw = data.get("personal", data.get("personal_info"))
    sections = {
        name: records_from_raw(cls, data.get(name)) for name, cls in RECORD_SECTIONS.items()
    }

    return ResumeDocument(
        personal=personal_from_raw(personal_raw),
        skills=skills_from_raw(data.get("skills")),
        interests=interests_from_raw(data.get("interests")),
        **sections,
    )


def document_to_dict(document: ResumeDocument) -> Dict[str, Any]:
    """Convert a ResumeDocument to its wire dict."""
    data: Dict[str, Any] = {"personal": personal_to_dict(document.personal)}
    for name in RECORD_SECTIONS:
        data[name] = [record_to_dict(record) for record in getattr(document, name)]
    data["skills"] = skills_to_raw(document.skills)
    data["interests"] = list(document.interests)
    return data


def load_document_file(path: Path) -> ResumeDocument:
    """
    Load a resume document from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    if path.suffix.lower() in (".yaml", ".yml"):
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    else:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    _log_debug(f"Loaded resume document from {path}")
    return document_from_dict(data)


def save_document_file(document: ResumeDocument, path: Path) -> Path:
    """Write a resume document as JSON (or YAML for .yaml/.yml paths)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = document_to_dict(document)

    if path.suffix.lower() in (".yaml", ".yml"):
        OmegaConf.save(OmegaConf.create(data), path)
    else:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
