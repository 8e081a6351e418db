"""
Resume Document Structure

Defines the structured, in-memory representation of a resume. This structure
is the interface between the Editing, Persistence, Drafting and Rendering
contexts.

All optional text fields default to "" (never None) so renderers can treat
every field as a plain string.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TypeVar

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")
SKILL_CATEGORIES = ("Technical", "Soft", "Language", "Tool", "Framework")

DEFAULT_SKILL_LEVEL = "Intermediate"
DEFAULT_SKILL_CATEGORY = "Technical"


@dataclass
class PersonalInfo:
    """Header block of the resume. Only full_name is required for export."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""


@dataclass
class Experience:
    id: int = 0
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


@dataclass
class Education:
    """
    Education entry.

    Attributes:
        courses: Comma-separated relevant coursework (free text)
    """

    id: int = 0
    school: str = ""
    degree: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    honors: str = ""
    description: str = ""
    courses: str = ""


@dataclass
class Project:
    id: int = 0
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""
    start_date: str = ""
    end_date: str = ""


@dataclass
class Certification:
    id: int = 0
    name: str = ""
    issuer: str = ""
    date: str = ""
    expiration: str = ""
    credential_id: str = ""
    verification_link: str = ""


@dataclass
class Language:
    id: int = 0
    language: str = ""
    proficiency: str = ""


@dataclass
class Reference:
    id: int = 0
    name: str = ""
    title: str = ""
    company: str = ""
    relationship: str = ""
    email: str = ""
    phone: str = ""


R = TypeVar("R")


def next_id(records: Sequence) -> int:
    """Next locally-unique id for a list: max existing id + 1 (1 when empty)."""
    return max((record.id for record in records), default=0) + 1


def assign_missing_ids(records: Iterable[R]) -> List[R]:
    """
    Copy records, giving each record without an id the next free one.

    Ids already present anywhere in the list are reserved first, so a filled
    id never collides with an explicit id appearing later.

    >>> [r.id for r in assign_missing_ids([Language(), Language(id=1)])]
    [2, 1]
    """
    records = list(records)
    taken = next_id([record for record in records if record.id]) - 1
    assigned = []
    for record in records:
        if not record.id:
            taken += 1
            record = replace(record, id=taken)
        assigned.append(record)
    return assigned


class SkillMode(str, Enum):
    """Discriminant of the skill representation."""

    SIMPLE = "simple"
    ENHANCED = "enhanced"


@dataclass
class Skill:
    """
    A single skill. level and category are only meaningful in ENHANCED mode.
    """

    name: str
    level: str = DEFAULT_SKILL_LEVEL
    category: str = DEFAULT_SKILL_CATEGORY


@dataclass
class SkillSet:
    """
    Tagged union of the two skill representations.

    Core logic reads `mode` and never inspects item shapes; shape inference
    from raw data happens only in vitae.contexts.editing.ingest.
    """

    mode: SkillMode = SkillMode.SIMPLE
    items: List[Skill] = field(default_factory=list)

    @classmethod
    def simple(cls, names: List[str]) -> "SkillSet":
        return cls(SkillMode.SIMPLE, [Skill(name=name) for name in names])

    @classmethod
    def enhanced(cls, skills: List[Skill]) -> "SkillSet":
        return cls(SkillMode.ENHANCED, list(skills))

    @property
    def is_enhanced(self) -> bool:
        return self.mode is SkillMode.ENHANCED

    @property
    def names(self) -> List[str]:
        return [skill.name for skill in self.items]

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class ResumeDocument:
    """
    Root value object of a resume.

    Every list is independently ordered; insertion order is display order.
    Record ids are unique within their own list only.
    """

    personal: PersonalInfo = field(default_factory=PersonalInfo)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: SkillSet = field(default_factory=SkillSet)
    projects: List[Project] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)

    @property
    def title(self) -> str:
        """Display title used when persisting."""
        if self.personal.full_name:
            return f"{self.personal.full_name}'s Resume"
        return "Untitled Resume"


@dataclass
class ResumeRecord:
    """
    Persistence envelope around a ResumeDocument.

    Attributes:
        id: Store-assigned id (None until first upsert)
        user_id: Owner of the resume
        template_id: Selected visual template
        job_description: Target job description used for ATS embedding
        updated_at: ISO 8601 timestamp of the last save
    """

    user_id: str
    document: ResumeDocument = field(default_factory=ResumeDocument)
    id: Optional[int] = None
    title: str = ""
    template_id: int = 0
    job_description: str = ""
    updated_at: str = ""
