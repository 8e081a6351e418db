"""
Form state store for the resume being edited.

Holds one ResumeDocument and mutates it exclusively through section-level
replace-whole-list operations. There is no partial/patch mutation of a
section: callers build the new list and hand it over.
"""

import re
from dataclasses import replace
from typing import Iterable, List, Optional

from vitae.contexts.editing.logger import log_section_update
from vitae.contexts.editing.resume_data_structure import (
    Certification,
    Education,
    Experience,
    Language,
    Project,
    Reference,
    ResumeDocument,
    Skill,
    SkillMode,
    SkillSet,
    assign_missing_ids,
)

# A line already starting with one of these glyphs (and a space) is left alone
BULLET_PREFIX_PATTERN = re.compile(r"^[•·‣▪▫-]\s")


def format_with_bullets(text: str) -> str:
    """
    Normalize free text into one bulleted line per non-empty input line.

    >>> format_with_bullets("Led team\\n\\n- Shipped v2")
    '• Led team\\n- Shipped v2'
    """
    if not text:
        return ""
    lines = [line.strip() for line in text.split("\n")]
    return "\n".join(
        line if BULLET_PREFIX_PATTERN.match(line) else f"• {line}" for line in lines if line
    )


class ResumeFormStore:
    """
    In-memory resume being edited.

    Each update_* method replaces one whole section. The document object is
    kept, its section attributes are swapped for new lists.
    """

    def __init__(self, document: Optional[ResumeDocument] = None):
        self._document = document if document is not None else ResumeDocument()

    @property
    def document(self) -> ResumeDocument:
        return self._document

    def load(self, document: ResumeDocument) -> None:
        """Replace the whole document (e.g., after a store fetch)."""
        self._document = document

    # --- Section replacement ---

    def update_personal(self, **fields: str) -> None:
        """Merge the given personal fields into the current ones."""
        self._document.personal = replace(self._document.personal, **fields)
        log_section_update("personal", len(fields))

    def update_experience(self, records: Iterable[Experience]) -> None:
        """Replace experience; descriptions are re-bulleted line by line."""
        formatted = [
            replace(record, description=format_with_bullets(record.description))
            for record in assign_missing_ids(records)
        ]
        self._replace("experience", formatted)

    def update_education(self, records: Iterable[Education]) -> None:
        self._replace("education", assign_missing_ids(records))

    def update_projects(self, records: Iterable[Project]) -> None:
        self._replace("projects", assign_missing_ids(records))

    def update_certifications(self, records: Iterable[Certification]) -> None:
        self._replace("certifications", assign_missing_ids(records))

    def update_languages(self, records: Iterable[Language]) -> None:
        self._replace("languages", assign_missing_ids(records))

    def update_references(self, records: Iterable[Reference]) -> None:
        self._replace("references", assign_missing_ids(records))

    def update_interests(self, interests: Iterable[str]) -> None:
        self._replace("interests", list(interests))

    def update_skills(self, skill_set: SkillSet) -> None:
        self._document.skills = SkillSet(skill_set.mode, list(skill_set.items))
        log_section_update("skills", len(skill_set))

    def _replace(self, section: str, records: list) -> None:
        setattr(self._document, section, records)
        log_section_update(section, len(records))

    # --- Convenience operations built on section replacement ---

    def add_interest(self, interest: str) -> bool:
        """Append an interest; returns False for blanks and exact duplicates."""
        interest = interest.strip()
        if not interest or interest in self._document.interests:
            return False
        self.update_interests([*self._document.interests, interest])
        return True

    def add_skill(self, skill: Skill) -> None:
        """Append a skill in the current mode."""
        current = self._document.skills
        self.update_skills(SkillSet(current.mode, [*current.items, skill]))

    def merge_skills(self, names: Iterable[str]) -> List[str]:
        """
        Add skill names not already present (case-insensitive).

        New skills take the current mode; in ENHANCED mode they get the
        default level and category.

        Returns:
            The names that were added
        """
        current = self._document.skills
        known = {name.lower() for name in current.names}
        added = []
        for name in names:
            if name and name.lower() not in known:
                known.add(name.lower())
                added.append(name)

        mode = current.mode if current.items else SkillMode.SIMPLE
        self.update_skills(SkillSet(mode, [*current.items, *(Skill(name=n) for n in added)]))
        return added
