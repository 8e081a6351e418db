"""
PDF export of a resume document.

export_resume() is the single entry point: it validates the document, lays
out every section on a fresh LayoutState, and returns the PDF bytes (writing
them to disk when asked). A failure anywhere in drawing surfaces as one
ExportError; there is no partial export.
"""

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from vitae.contexts.editing.resume_data_structure import ResumeDocument
from vitae.contexts.rendering import sections
from vitae.contexts.rendering.ats import embed_keywords
from vitae.contexts.rendering.config import LayoutConfig, load_layout_config
from vitae.contexts.rendering.layout import LayoutState, PdfSurface
from vitae.contexts.rendering.logger import (
    _log_error,
    log_export_result,
    log_export_start,
)
from vitae.exceptions import ExportError, MissingRequiredFieldError

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


@dataclass
class ExportResult:
    """
    Result of a PDF export.

    Attributes:
        filename: Suggested download name (see export_filename)
        pdf_bytes: The complete PDF document
        pdf_path: Where the PDF was written (None if not written)
        page_count: Number of pages
        ats_characters: Characters of job description embedded (0 if none)
        sections: Keys of the sections that were drawn, in order
    """

    filename: str
    pdf_bytes: bytes
    pdf_path: Optional[Path] = None
    page_count: int = 1
    ats_characters: int = 0
    sections: List[str] = field(default_factory=list)


def export_filename(full_name: str) -> str:
    """
    Download name for a resume PDF.

    Examples:
        >>> export_filename("Jane Doe")
        'Jane_Doe_Resume.pdf'
        >>> export_filename("José O'Neil")
        'Jos__O_Neil_Resume.pdf'
    """
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', full_name)}_Resume.pdf"


def _render_document(state: LayoutState, document: ResumeDocument) -> List[str]:
    """Draw all sections in display order; returns the keys of drawn sections."""
    drawn = []
    renderers = [
        ("header", sections.render_header, document.personal),
        ("summary", sections.render_summary, document.personal.summary),
        ("experience", sections.render_experience, document.experience),
        ("education", sections.render_education, document.education),
        ("skills", sections.render_skills, document.skills),
        ("projects", sections.render_projects, document.projects),
        ("certifications", sections.render_certifications, document.certifications),
        ("languages", sections.render_languages, document.languages),
        ("interests", sections.render_interests, document.interests),
        ("references", sections.render_references, document.references),
    ]
    for key, render, data in renderers:
        if render(state, data):
            drawn.append(key)
    return drawn


def _resolve_output_path(output_path: Union[str, Path], filename: str) -> Path:
    """A directory (existing, or given without a suffix) receives filename."""
    output_path = Path(output_path)
    if output_path.is_dir() or not output_path.suffix:
        return output_path / filename
    return output_path


def export_resume(
    document: ResumeDocument,
    output_path: Optional[Union[str, Path]] = None,
    job_description: Optional[str] = None,
    config: Optional[LayoutConfig] = None,
) -> ExportResult:
    """
    Render a resume document to PDF.

    Args:
        document: Resume to export (personal.full_name is required)
        output_path: File or directory to write the PDF to (None = bytes only)
        job_description: When given, embedded as hidden text for ATS matching
        config: Layout settings (default: load_layout_config())

    Returns:
        ExportResult with the PDF bytes and layout statistics

    Raises:
        MissingRequiredFieldError: If the name is blank (nothing is drawn)
        ExportError: If anything fails while drawing or writing
    """
    full_name = document.personal.full_name
    if not full_name or not full_name.strip():
        raise MissingRequiredFieldError(
            "personal.fullName", "Please enter your name before exporting to PDF"
        )

    filename = export_filename(full_name)
    has_job_description = bool(job_description and job_description.strip())
    log_export_start(full_name, has_job_description)
    start_time = time.time()

    try:
        config = config or load_layout_config()
        surface = PdfSurface(config, title=document.title, author=full_name)
        state = LayoutState(config, surface)

        ats_characters = embed_keywords(state, job_description) if has_job_description else 0
        drawn = _render_document(state, document)
        pdf_bytes = surface.finish()

        pdf_path = None
        if output_path is not None:
            pdf_path = _resolve_output_path(output_path, filename)
            pdf_path.parent.mkdir(parents=True, exist_ok=True)
            pdf_path.write_bytes(pdf_bytes)
    except Exception as e:
        _log_error(f"PDF generation error: {type(e).__name__}: {e}")
        raise ExportError() from e

    result = ExportResult(
        filename=filename,
        pdf_bytes=pdf_bytes,
        pdf_path=pdf_path,
        page_count=surface.page_count,
        ats_characters=ats_characters,
        sections=drawn,
    )
    log_export_result(result, time.time() - start_time)
    return result
