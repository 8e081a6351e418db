"""
Section renderers for PDF export.

Each render_* function draws one resume section at the cursor of a
LayoutState and advances it. Sections with nothing to show draw nothing
(no orphan header) and return False.
"""

import math
import re
from typing import List, Optional, Sequence, Tuple

from vitae.contexts.editing.resume_data_structure import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    Reference,
    SkillSet,
)
from vitae.contexts.rendering.dates import format_date, format_date_range
from vitae.contexts.rendering.layout import (
    BULLET,
    LayoutState,
    add_bullet_points,
    add_text,
    draw_columns,
    section_header,
    wrap_text,
)
from vitae.contexts.rendering.logger import _log_debug, _log_warning
from vitae.contexts.rendering.sanitizer import clean, to_printable, validate_reference

SECTION_TITLES = {
    "summary": "Executive Summary",
    "experience": "Professional Experience",
    "education": "Education",
    "skills": "Core Competencies & Technical Skills",
    "projects": "Projects",
    "certifications": "Certifications",
    "languages": "Languages",
    "interests": "Interests",
    "references": "References",
}

INLINE_SEPARATOR = f" {BULLET} "
CONTACT_SEPARATOR = "  |  "

SKILL_STOPLIST = {
    "early",
    "looking",
    "public",
    "start",
    "stage",
    "sector",
    "mobility",
    "transportation",
    "revolutionize",
    "production",
}

_ACRONYM = re.compile(r"^[A-Z]{2,}$")
_TECHNICAL_PATTERNS = (
    _ACRONYM,
    re.compile(r"CAD$", re.IGNORECASE),
    re.compile(r"^[A-Z][a-z]+[A-Z]"),
    re.compile(r"Linux|Windows|Mac", re.IGNORECASE),
    re.compile(r"SQL|Python|Java|JavaScript|HTML|CSS", re.IGNORECASE),
)


def _rule(
    state: LayoutState, color, width: float, y: Optional[float] = None, inset: float = 0
) -> None:
    """Horizontal line across the content width."""
    surface = state.surface
    surface.set_draw_color(color)
    surface.set_line_width(width)
    y = state.y if y is None else y
    surface.line(state.margin + inset, y, state.right_edge - inset, y)


def _boxed_text(state: LayoutState, text: str) -> None:
    """8pt accent text on a light background box (links)."""
    surface, colors = state.surface, state.config.colors
    surface.set_font("normal", 8)
    surface.set_text_color(colors.accent)
    width = surface.text_width(text)
    surface.set_fill_color(colors.link_background)
    surface.rect(state.margin - 1, state.y - 3, width + 2, 5)
    surface.text(text, state.margin, state.y)


def _right_aligned(state: LayoutState, text: str) -> None:
    state.surface.text(text, state.right_edge - state.surface.text_width(text), state.y)


# --- Header & Summary ---


def render_header(state: LayoutState, personal: PersonalInfo) -> bool:
    """Centered name with an accent underline, then the contact line."""
    if not personal.full_name:
        return False
    surface, colors, debug = state.surface, state.config.colors, state.config.debug

    surface.set_font("bold", 26)
    surface.set_text_color(colors.primary)
    name = clean(personal.full_name, debug)
    name_width = surface.text_width(name)
    surface.text(name, (state.page_width - name_width) / 2, state.y)
    state.advance(10)

    surface.set_draw_color(colors.accent)
    surface.set_line_width(0.8)
    underline = name_width * 0.6
    underline_x = (state.page_width - underline) / 2
    surface.line(underline_x, state.y - 2, underline_x + underline, state.y - 2)
    state.advance(6)

    surface.set_font("normal", 10)
    surface.set_text_color(colors.secondary)
    contact = [
        clean(value, debug)
        for value in (personal.email, personal.phone, personal.location)
        if value
    ]
    if contact:
        contact_text = INLINE_SEPARATOR.join(contact)
        contact_x = (state.page_width - surface.text_width(contact_text)) / 2
        surface.text(contact_text, contact_x, state.y)
        state.advance(4)
    state.advance(5)
    return True


def render_summary(state: LayoutState, summary: str) -> bool:
    """Summary paragraph with a thin vertical rule along its left edge."""
    if not summary:
        return False
    section_header(state, SECTION_TITLES["summary"])

    start_page = state.page_count
    start_y = state.y
    add_text(state, summary, 10, "normal", 6)
    if state.page_count != start_page:
        start_y = state.margin

    surface = state.surface
    surface.set_draw_color(state.config.colors.light_gray)
    surface.set_line_width(0.2)
    x = state.margin + 2
    surface.line(x, start_y - 3, x, state.y - 3)
    state.advance(3)
    return True


# --- Experience ---


def render_experience(state: LayoutState, records: Sequence[Experience]) -> bool:
    if not records:
        return False
    surface, colors, debug = state.surface, state.config.colors, state.config.debug
    section_header(state, SECTION_TITLES["experience"])

    for index, exp in enumerate(records):
        state.check_page_break(20)
        surface.set_font("bold", 12)
        surface.set_text_color(colors.primary)
        surface.text(clean(exp.position or "Position", debug), state.margin, state.y)
        state.advance(5)

        surface.set_font("bolditalic", 10)
        surface.set_text_color(colors.accent)
        surface.text(clean(exp.company or "Company", debug), state.margin, state.y)
        if exp.start_date or exp.end_date:
            surface.set_font("normal")
            surface.set_text_color(colors.secondary)
            _right_aligned(state, format_date_range(exp.start_date, exp.end_date))
        state.advance(4)

        if exp.location:
            surface.set_font("italic", 9)
            surface.set_text_color(colors.light_gray)
            surface.text(clean(exp.location, debug), state.margin, state.y)
            state.advance(3)

        _rule(state, colors.light_gray, 0.2)
        state.advance(4)
        if exp.description:
            add_bullet_points(state, exp.description, 6, True)
        state.advance(4 if index < len(records) - 1 else 2)
    return True


# --- Education ---


def parse_courses(courses: str) -> List[str]:
    """Comma-separated coursework -> trimmed, non-empty, sorted (duplicates kept)."""
    items = [to_printable(course) for course in (courses or "").split(",")]
    return sorted((item for item in items if item), key=str.casefold)


def _render_courses(state: LayoutState, courses: List[str]) -> None:
    surface, colors, settings = state.surface, state.config.colors, state.config.courses

    state.advance(3)
    heading = "Relevant Coursework"
    surface.set_font("bold", 10)
    surface.set_text_color(colors.primary)
    surface.text(heading, state.margin, state.y)
    surface.set_line_width(0.3)
    surface.set_draw_color(colors.primary)
    surface.line(
        state.margin, state.y + 1, state.margin + surface.text_width(heading), state.y + 1
    )
    state.advance(6)

    left_x = state.margin + settings.indent
    column_width = (state.content_width - 2 * settings.indent) / 2 - 10
    surface.set_font("normal", settings.font_size)
    surface.set_text_color(colors.text)

    midpoint = math.ceil(len(courses) / 2)
    items = [f"{BULLET} {course}" for course in courses]
    draw_columns(
        state,
        [items[:midpoint], items[midpoint:]],
        [left_x, left_x + column_width + settings.column_gap],
        column_width,
        settings.line_height,
        continuation_height=settings.line_height - 1,
    )
    state.advance(2)


def render_education(state: LayoutState, records: Sequence[Education]) -> bool:
    if not records:
        return False
    surface, colors, debug = state.surface, state.config.colors, state.config.debug
    section_header(state, SECTION_TITLES["education"])

    for index, edu in enumerate(records):
        state.check_page_break(25)
        surface.set_font("bold", 13)
        surface.set_text_color(colors.primary)
        surface.text(clean(edu.degree or "Degree", debug), state.margin, state.y)
        if edu.start_date or edu.end_date:
            start = format_date(edu.start_date)
            end = format_date(edu.end_date, is_end_date=True)
            surface.set_font("bold", 10)
            surface.set_text_color(colors.secondary)
            _right_aligned(state, f"{start} – {end}" if start else end)
        state.advance(6)

        surface.set_font("bold", 11)
        surface.set_text_color(colors.accent)
        surface.text(clean(edu.school or "School", debug), state.margin, state.y)
        state.advance(5)

        details = []
        if edu.location:
            details.append(clean(edu.location, debug))
        if edu.gpa:
            details.append(f"GPA: {clean(edu.gpa, debug)}")
        if edu.honors:
            details.append(clean(edu.honors, debug))
        if details:
            surface.set_font("normal", 9)
            surface.set_text_color(colors.secondary)
            surface.text(INLINE_SEPARATOR.join(details), state.margin, state.y)
            state.advance(5)

        if edu.description:
            state.advance(1)
            surface.set_font("normal", 9)
            surface.set_text_color(colors.text)
            for line in wrap_text(clean(edu.description, debug), state.content_width - 8, surface):
                state.check_page_break(4)
                surface.text(line, state.margin + 4, state.y)
                state.advance(3.5)
            state.advance(2)

        courses = parse_courses(edu.courses)
        if courses:
            _render_courses(state, courses)

        if index < len(records) - 1:
            state.advance(4)
            _rule(state, colors.light_gray, 0.2, inset=20)
            state.advance(6)
        else:
            state.advance(8)
    return True


# --- Skills ---


def is_valid_skill(skill: str) -> bool:
    """
    Heuristic filter for skill names.

    All-caps acronyms (AI, AWS) always pass. Otherwise short names and
    stoplisted filler words are rejected; names that look technical, are
    capitalized, or are longer than four characters are kept.
    """
    skill = skill.strip()
    if _ACRONYM.match(skill):
        return True
    if len(skill) < 3:
        return False
    if skill.lower() in SKILL_STOPLIST:
        return False

    is_technical = any(pattern.search(skill) for pattern in _TECHNICAL_PATTERNS)
    is_capitalized = bool(re.match(r"[A-Z]", skill))
    return is_technical or is_capitalized or len(skill) > 4


def prepare_skills(skills: SkillSet, debug: bool = False) -> List[str]:
    """Display list: cleaned, filtered, first letter capitalized, sorted case-insensitively."""
    names = [clean(name, debug) for name in skills.names]
    kept = [name for name in names if name and is_valid_skill(name)]
    dropped = len(names) - len(kept)
    if dropped:
        _log_debug(f"Skills filter dropped {dropped} of {len(names)}")
    capitalized = [name[0].upper() + name[1:] for name in kept]
    return sorted(capitalized, key=str.casefold)


def render_skills(state: LayoutState, skills: SkillSet) -> bool:
    names = prepare_skills(skills, state.config.debug)
    if not names:
        return False
    surface, settings = state.surface, state.config.skills
    section_header(state, SECTION_TITLES["skills"])

    surface.set_font("normal", settings.font_size)
    surface.set_text_color(state.config.colors.text)
    max_width = state.content_width - settings.indent
    left_x = state.margin + settings.indent

    if len(names) >= settings.min_for_columns:
        midpoint = math.ceil(len(names) / 2)
        items = [settings.bullet + name for name in names]
        draw_columns(
            state,
            [items[:midpoint], items[midpoint:]],
            [left_x, left_x + max_width / 2 + settings.column_gap],
            max_width / 2 - settings.column_gap,
            settings.line_height,
        )
    else:
        lines = wrap_text(INLINE_SEPARATOR.join(names), max_width, surface)
        if not lines:
            _log_warning("No text lines generated for skills section")
        for line in lines:
            state.check_page_break(settings.line_height)
            surface.text(line, left_x, state.y)
            state.advance(settings.line_height)

    state.advance(settings.spacing_after)
    return True


# --- Projects ---


def _render_project_meta(state: LayoutState, project: Project) -> None:
    """Date range with right-aligned technologies, or technologies alone."""
    surface, colors, debug = state.surface, state.config.colors, state.config.debug
    technologies = clean(project.technologies, debug) if project.technologies else ""

    if project.start_date or project.end_date:
        surface.set_font("bolditalic", 9)
        surface.set_text_color(colors.accent)
        date_info = format_date_range(project.start_date, project.end_date)
        surface.text(date_info, state.margin, state.y)

        if technologies:
            tech_text = f"Tech: {technologies}"
            date_width = surface.text_width(date_info)
            right_x = state.right_edge - surface.text_width(tech_text)
            if right_x > state.margin + date_width + 15:
                surface.text(tech_text, right_x, state.y)
            else:
                state.advance(4)
                surface.set_font("italic")
                surface.set_text_color(colors.secondary)
                surface.text(tech_text, state.margin, state.y)
        state.advance(4)
    elif technologies:
        surface.set_font("italic", 9)
        surface.set_text_color(colors.secondary)
        surface.text(f"Technologies: {technologies}", state.margin, state.y)
        state.advance(4)


def render_projects(state: LayoutState, records: Sequence[Project]) -> bool:
    named = [project for project in records if project.name and project.name.strip()]
    if not named:
        return False
    surface, colors, debug = state.surface, state.config.colors, state.config.debug
    section_header(state, SECTION_TITLES["projects"])

    for index, project in enumerate(named):
        state.check_page_break(25)
        surface.set_font("bold", 12)
        surface.set_text_color(colors.primary)
        surface.text(clean(project.name, debug), state.margin, state.y)
        state.advance(5)

        _render_project_meta(state, project)

        _rule(state, colors.light_gray, 0.2)
        state.advance(4)
        if project.description:
            add_bullet_points(state, project.description, 6, True)

        if project.link:
            state.advance(1)
            _boxed_text(state, f"Link: {to_printable(project.link)}")
            state.advance(5)
        state.advance(6 if index < len(named) - 1 else 3)
    return True


# --- Certifications ---


def render_certifications(state: LayoutState, records: Sequence[Certification]) -> bool:
    if not records:
        return False
    surface, colors, debug = state.surface, state.config.colors, state.config.debug
    section_header(state, SECTION_TITLES["certifications"])

    for index, cert in enumerate(records):
        state.check_page_break(10)
        surface.set_font("bold", 11)
        surface.set_text_color(colors.primary)
        surface.text(clean(cert.name, debug), state.margin, state.y)
        state.advance(4)

        issued = [clean(value, debug) for value in (cert.issuer, cert.date) if value]
        if issued:
            surface.set_font("italic", 9)
            surface.set_text_color(colors.accent)
            surface.text(f"Issued by: {INLINE_SEPARATOR.join(issued)}", state.margin, state.y)
            state.advance(3)

        if cert.expiration:
            surface.set_font("normal", 8)
            surface.set_text_color(colors.secondary)
            surface.text(f"Expires: {clean(cert.expiration, debug)}", state.margin, state.y)
            state.advance(3)

        if cert.credential_id:
            surface.set_font("normal", 8)
            surface.set_text_color(colors.light_gray)
            surface.text(f"Credential ID: {clean(cert.credential_id, debug)}", state.margin, state.y)
            state.advance(3)

        if cert.verification_link:
            _boxed_text(state, f"Verify: {to_printable(cert.verification_link)}")
            state.advance(3)

        if index < len(records) - 1:
            _rule(state, colors.light_gray, 0.1, y=state.y + 2)
            state.advance(4)
        else:
            state.advance(2)
    state.advance(3)
    return True


# --- Languages ---


def prepare_languages(records: Sequence[Language], debug: bool = False) -> List[Tuple[str, str]]:
    """(name, proficiency) pairs with both present, sorted by name."""
    pairs = [(clean(lang.language, debug), clean(lang.proficiency, debug)) for lang in records]
    return sorted(
        [(name, proficiency) for name, proficiency in pairs if name and proficiency],
        key=lambda pair: pair[0].casefold(),
    )


def render_languages(state: LayoutState, records: Sequence[Language]) -> bool:
    languages = prepare_languages(records, state.config.debug)
    if not languages:
        return False
    surface, colors, settings = state.surface, state.config.colors, state.config.languages
    section_header(state, SECTION_TITLES["languages"])

    surface.set_font("normal", settings.font_size)
    surface.set_text_color(colors.text)
    surface.set_fill_color(colors.text)
    labels = [f"{name} ({proficiency})" for name, proficiency in languages]

    def dot(x: float, y: float) -> None:
        surface.circle(x, y - 1, settings.bullet_radius)

    if len(labels) < settings.min_for_columns:
        x = state.margin + settings.indent
        for label in labels:
            state.check_page_break(settings.line_height)
            dot(x, state.y)
            surface.text(label, x + 4, state.y)
            state.advance(settings.line_height)
    else:
        max_width = state.content_width - settings.indent
        column_count = settings.columns
        column_width = (max_width - (column_count - 1) * settings.column_gap) / column_count
        per_column = math.ceil(len(labels) / column_count)
        columns = [labels[c * per_column : (c + 1) * per_column] for c in range(column_count)]
        xs = [
            state.margin + settings.indent + c * (column_width + settings.column_gap)
            for c in range(column_count)
        ]
        draw_columns(
            state,
            columns,
            xs,
            column_width - 6,
            settings.line_height,
            max_lines=1,
            marker=dot,
            text_offset=4,
        )

    state.advance(settings.spacing_after)
    return True


# --- Interests ---


def render_interests(state: LayoutState, interests: Sequence[str]) -> bool:
    debug = state.config.debug
    cleaned = [clean(interest, debug) for interest in interests if interest and interest.strip()]
    cleaned = sorted((interest for interest in cleaned if interest), key=str.casefold)
    if not cleaned:
        return False
    surface, colors, settings = state.surface, state.config.colors, state.config.interests
    section_header(state, SECTION_TITLES["interests"])

    surface.set_font("normal", settings.font_size)
    surface.set_text_color(colors.text)
    max_width = state.content_width - settings.indent
    left_x = state.margin + settings.indent
    alignment = settings.alignment

    lines = wrap_text(settings.separator.join(cleaned), max_width, surface)
    for index, line in enumerate(lines):
        state.check_page_break(settings.line_height + 2)
        line_width = surface.text_width(line)

        if alignment == "center":
            surface.text(line, (state.page_width - line_width) / 2, state.y)
        elif alignment == "right":
            surface.text(line, state.right_edge - line_width, state.y)
        elif alignment == "justified" and index < len(lines) - 1 and " " in line:
            words = line.split(" ")
            spacing = (max_width - sum(surface.text_width(word) for word in words)) / (len(words) - 1)
            x = left_x
            for word in words:
                surface.text(word, x, state.y)
                x += surface.text_width(word) + spacing
        else:
            surface.text(line, left_x, state.y)
        state.advance(settings.line_height)

    state.advance(settings.spacing_after)

    if alignment in ("center", "right"):
        width = settings.decoration_width
        if alignment == "center":
            x = (state.page_width - width) / 2
        else:
            x = state.right_edge - width
        surface.set_draw_color(colors.accent)
        surface.set_line_width(0.3)
        surface.line(x, state.y - 2, x + width, state.y - 2)
        state.advance(3)
    return True


# --- References ---


def render_references(state: LayoutState, records: Sequence[Reference]) -> bool:
    if not records:
        return False
    surface, colors = state.surface, state.config.colors
    section_header(state, SECTION_TITLES["references"])

    for index, raw in enumerate(records):
        ref = validate_reference(raw)
        state.check_page_break(25)
        surface.set_font("bold", 12)
        surface.set_text_color(colors.primary)
        surface.text(ref.name, state.margin, state.y)
        state.advance(6)

        title_company = [value for value in (ref.title, ref.company) if value]
        if title_company:
            surface.set_font("italic", 10)
            surface.set_text_color(colors.accent)
            surface.text(" at ".join(title_company), state.margin, state.y)
            state.advance(5)

        if ref.relationship:
            surface.set_font("normal", 9)
            surface.set_text_color(colors.secondary)
            surface.text(f"Relationship: {ref.relationship}", state.margin, state.y)
            state.advance(4)

        contact = []
        if ref.email:
            contact.append(f"Email: {ref.email}")
        if ref.phone:
            contact.append(f"Phone: {ref.phone}")
        if contact:
            surface.set_font("normal", 9)
            surface.set_text_color(colors.text)
            contact_text = CONTACT_SEPARATOR.join(contact)
            if surface.text_width(contact_text) > state.content_width:
                for item in contact:
                    surface.text(item, state.margin, state.y)
                    state.advance(3)
            else:
                surface.text(contact_text, state.margin, state.y)
                state.advance(4)

        if index < len(records) - 1:
            state.advance(2)
            _rule(state, colors.light_gray, 0.1)
            state.advance(6)
        else:
            state.advance(2)
    return True
