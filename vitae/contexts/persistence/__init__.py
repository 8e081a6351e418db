"""
Persistence Context

Responsibilities:
- Persists resume records wholesale (upsert keyed by resume id + user id)
- Retrieves the most recently updated resume, or one by explicit id
- Owns the stored shape (JSON-encoded nested fields, timestamps)

Owns: Resume storage
Never: Interprets resume content beyond the ingestion boundary
"""

from vitae.contexts.persistence.resume_store import ResumeStore

__all__ = ["ResumeStore"]
