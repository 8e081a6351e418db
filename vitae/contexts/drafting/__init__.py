"""
Drafting Context

Responsibilities:
- Builds prompts for summaries, education text, coursework, skills and interests
- Calls the text-generation service once per request (no retry)
- Filters and de-duplicates structured suggestions

Owns: Prompt wording, suggestion filtering
Never: Reads credentials from the environment, mutates resume documents
"""

from vitae.contexts.drafting.assistant import DraftingAssistant, generate_text

__all__ = ["DraftingAssistant", "generate_text"]
