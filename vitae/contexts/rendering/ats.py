"""
ATS keyword embedding.

Applicant tracking systems match keywords against the text layer of a PDF.
The job description is drawn on page one at a near-invisible size in the
background color, so it is extractable but not visible in print.
"""

from typing import List

from vitae.contexts.rendering.layout import LayoutState
from vitae.contexts.rendering.logger import _log_debug
from vitae.contexts.rendering.sanitizer import clean


def chunk_text(text: str, size: int) -> List[str]:
    """Fixed-size consecutive slices of text (the last may be shorter)."""
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [text[start : start + size] for start in range(0, len(text), size)]


def embed_keywords(state: LayoutState, job_description: str) -> int:
    """
    Draw the cleaned job description as hidden text on the current page.

    Chunks are tiled over `columns` horizontal offsets, stepping down one
    row per chunk. The cursor is not moved.

    Returns:
        Number of characters embedded (0 when there is nothing to embed)
    """
    text = clean(job_description, state.config.debug)
    if not text:
        return 0

    settings, surface = state.config.ats, state.surface
    surface.set_font("normal", settings.font_size)
    surface.set_text_color(settings.color)

    chunks = chunk_text(text, settings.chunk_size)
    for index, chunk in enumerate(chunks):
        x = state.margin + (index % settings.columns) * settings.column_offset
        y = state.margin + settings.top_offset + index * settings.row_step
        surface.text(chunk, x, y)

    surface.set_text_color(state.config.colors.text)
    _log_debug(f"Embedded job description: {len(text)} characters in {len(chunks)} chunks")
    return len(text)
