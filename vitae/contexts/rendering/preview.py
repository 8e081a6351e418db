"""
HTML preview of a resume.

Applies the same sanitizer, date formatting, skill filter and ordering rules
as the PDF exporter so the preview shows what will be exported. The markup
lives in templates/preview.html.jinja.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from vitae.contexts.editing.resume_data_structure import ResumeDocument
from vitae.contexts.rendering.config import LayoutConfig, load_layout_config
from vitae.contexts.rendering.dates import format_date, format_date_range
from vitae.contexts.rendering.sanitizer import (
    clean,
    strip_leading_bullet,
    to_printable,
    validate_reference,
)
from vitae.contexts.rendering.sections import (
    SECTION_TITLES,
    parse_courses,
    prepare_languages,
    prepare_skills,
)

TEMPLATES_PATH = Path(__file__).parent / "templates"
PREVIEW_TEMPLATE = "preview.html.jinja"


def _bullets(text: str) -> list:
    lines = (to_printable(strip_leading_bullet(line)) for line in (text or "").split("\n"))
    return [line for line in lines if line]


def _css_rgb(color) -> str:
    return "rgb({}, {}, {})".format(*color)


def build_preview_context(document: ResumeDocument, config: LayoutConfig) -> Dict[str, Any]:
    """View model for the preview template (all strings already cleaned)."""
    personal = document.personal
    contact = [
        clean(value) for value in (personal.email, personal.phone, personal.location) if value
    ]

    experience = [
        {
            "position": clean(exp.position or "Position"),
            "company": clean(exp.company or "Company"),
            "dates": format_date_range(exp.start_date, exp.end_date)
            if exp.start_date or exp.end_date
            else "",
            "location": clean(exp.location),
            "bullets": _bullets(exp.description),
        }
        for exp in document.experience
    ]

    education = []
    for edu in document.education:
        start = format_date(edu.start_date)
        end = format_date(edu.end_date, is_end_date=True)
        details = [clean(edu.location)] if edu.location else []
        if edu.gpa:
            details.append(f"GPA: {clean(edu.gpa)}")
        if edu.honors:
            details.append(clean(edu.honors))
        education.append(
            {
                "degree": clean(edu.degree or "Degree"),
                "school": clean(edu.school or "School"),
                "dates": (f"{start} – {end}" if start else end)
                if edu.start_date or edu.end_date
                else "",
                "details": details,
                "description": clean(edu.description),
                "courses": parse_courses(edu.courses),
            }
        )

    projects = [
        {
            "name": clean(project.name),
            "dates": format_date_range(project.start_date, project.end_date)
            if project.start_date or project.end_date
            else "",
            "technologies": clean(project.technologies),
            "bullets": _bullets(project.description),
            "link": to_printable(project.link),
        }
        for project in document.projects
        if project.name and project.name.strip()
    ]

    certifications = [
        {
            "name": clean(cert.name),
            "issued": [clean(value) for value in (cert.issuer, cert.date) if value],
            "expiration": clean(cert.expiration),
            "credential_id": clean(cert.credential_id),
            "verification_link": to_printable(cert.verification_link),
        }
        for cert in document.certifications
    ]

    interests = sorted(
        (clean(interest) for interest in document.interests if interest and interest.strip()),
        key=str.casefold,
    )

    return {
        "title": document.title,
        "titles": SECTION_TITLES,
        "name": clean(personal.full_name),
        "contact": contact,
        "summary": clean(personal.summary),
        "experience": experience,
        "education": education,
        "skills": prepare_skills(document.skills),
        "projects": projects,
        "certifications": certifications,
        "languages": prepare_languages(document.languages),
        "interests": [interest for interest in interests if interest],
        "references": [validate_reference(ref) for ref in document.references],
        "colors": {
            "primary": _css_rgb(config.colors.primary),
            "secondary": _css_rgb(config.colors.secondary),
            "accent": _css_rgb(config.colors.accent),
            "text": _css_rgb(config.colors.text),
            "light_gray": _css_rgb(config.colors.light_gray),
            "link_background": _css_rgb(config.colors.link_background),
        },
        "font_family": config.font_family,
        "interests_alignment": config.interests.alignment,
    }


def render_preview(
    document: ResumeDocument, scale: float = 0.6, config: Optional[LayoutConfig] = None
) -> str:
    """
    Render a scaled HTML preview of the resume.

    Args:
        document: Resume to preview
        scale: Preview size relative to the printed page (0.6 = 60%)
        config: Layout settings (default: load_layout_config())

    Returns:
        Standalone HTML document
    """
    if scale <= 0:
        raise ValueError(f"Preview scale must be positive, got {scale}")
    config = config or load_layout_config()

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_PATH)),
        # Catches silent failures
        undefined=StrictUndefined,
        autoescape=select_autoescape(enabled_extensions=("html", "jinja")),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(PREVIEW_TEMPLATE)

    context = build_preview_context(document, config)
    context.update(
        scale=scale,
        page_width_mm=round(config.page_width * scale, 2),
        page_height_mm=round(config.page_height * scale, 2),
        margin_mm=round(config.margin * scale, 2),
    )
    return template.render(**context)
