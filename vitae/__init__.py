"""
VITAE - Visual Interactive Template-Aware Export

A resume builder backend: structured resume data, AI-assisted drafting and
paginated PDF export with ATS keyword embedding.

Architecture:
- Editing Context: Resume data model, ingestion boundary and form state
- Persistence Context: Resume storage keyed by user and resume id
- Drafting Context: Prompt construction and generated-text handling
- Rendering Context: PDF export, pagination and HTML preview
"""

__version__ = "0.1.0"
