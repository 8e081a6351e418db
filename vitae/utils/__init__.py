"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup
- Timestamps
- LLM providers
- PDF inspection (test support; needs the `test` extra)
"""

from vitae.utils.timestamp import format_timestamp, now, now_exact, today

__all__ = ["format_timestamp", "now", "now_exact", "today"]
