"""
Editing Context

Responsibilities:
- Defines the structured resume data model (ResumeDocument and section records)
- Converts between external wire data and ResumeDocument (ingestion boundary)
- Holds the resume being edited and applies whole-section replacements

Owns: Resume data model, skill mode inference, malformed-data coercion
Never: Draws, persists or calls the AI service
"""

from vitae.contexts.editing.form_store import ResumeFormStore, format_with_bullets
from vitae.contexts.editing.ingest import (
    document_from_dict,
    document_to_dict,
    load_document_file,
    save_document_file,
    skills_from_raw,
)
from vitae.contexts.editing.resume_data_structure import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    Reference,
    ResumeDocument,
    ResumeRecord,
    Skill,
    SkillMode,
    SkillSet,
    assign_missing_ids,
    next_id,
)

__all__ = [
    # Data structures
    "PersonalInfo",
    "Experience",
    "Education",
    "Project",
    "Certification",
    "Language",
    "Reference",
    "Skill",
    "SkillMode",
    "SkillSet",
    "ResumeDocument",
    "ResumeRecord",
    "assign_missing_ids",
    "next_id",
    # Ingestion boundary
    "document_from_dict",
    "document_to_dict",
    "skills_from_raw",
    "load_document_file",
    "save_document_file",
    # Form state
    "ResumeFormStore",
    "format_with_bullets",
]
