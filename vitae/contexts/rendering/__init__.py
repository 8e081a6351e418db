"""
Rendering Context

Responsibilities:
- Sanitizes user text for the built-in PDF fonts
- Lays out resume sections with pagination (single cursor per export)
- Embeds job-description keywords as hidden text for ATS matching
- Renders an HTML preview with the same formatting rules

Owns: PDF layout, layout configuration, preview markup
Never: Persists resumes, calls the AI service
"""

from vitae.contexts.rendering.exporter import ExportResult, export_filename, export_resume
from vitae.contexts.rendering.preview import render_preview

__all__ = ["ExportResult", "export_filename", "export_resume", "render_preview"]
