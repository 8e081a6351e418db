"""
AI-assisted drafting of resume content.

generate_text() is the single entry point to the text-generation service.
DraftingAssistant binds a credential and provider and exposes one method per
drafting task; each checks its required inputs before any call is made.

Credentials are never read here. Callers (CLIs) supply the API key.
"""

import os
import time
from typing import Iterable, List, Optional

from vitae.contexts.drafting import prompts
from vitae.contexts.drafting.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_generation_result,
    log_generation_start,
)
from vitae.contexts.editing.resume_data_structure import (
    SKILL_CATEGORIES,
    SKILL_LEVELS,
    Education,
    PersonalInfo,
    Skill,
)
from vitae.exceptions import (
    GenerationFailedError,
    MissingCredentialError,
    MissingRequiredFieldError,
)
from vitae.utils.llm import LLMProvider, get_provider, parse_comma_list, parse_json_array

MAX_INTERESTS = 6
MAX_INTEREST_LENGTH = 30


def default_provider_name() -> str:
    return os.getenv("LLM_PROVIDER", "gemini")


def generate_text(
    prompt: str,
    api_key: Optional[str],
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
    task: str = "text",
) -> str:
    """
    Send one prompt to the text-generation service and return the reply text.

    Args:
        prompt: Complete prompt text
        api_key: Caller-supplied credential (required even with an injected provider)
        provider_name: "gemini", "anthropic" or "openai" (default: $LLM_PROVIDER or gemini)
        model: Optional model override
        provider: Pre-built provider; skips construction from provider_name
        task: Label for logging

    Returns:
        Trimmed response text

    Raises:
        MissingCredentialError: If api_key is empty (no call is made)
        GenerationFailedError: If the call fails or returns no content
    """
    provider_name = provider_name or default_provider_name()
    if not api_key:
        raise MissingCredentialError(provider_name)

    try:
        if provider is None:
            provider = get_provider(provider_name, api_key, model)
        log_generation_start(task, provider.name, prompt)

        start_time = time.time()
        response = provider.generate(prompt)
        elapsed_time = time.time() - start_time
    except Exception as e:
        _log_error(f"Generation of {task} failed: {e}")
        raise GenerationFailedError(f"Failed to generate {task}", original_error=e) from e

    content = (response.content or "").strip()
    if not content:
        _log_error(f"Empty response for {task}")
        raise GenerationFailedError("No content received from AI")

    log_generation_result(task, response, elapsed_time)
    return content


class DraftingAssistant:
    """
    Drafting tasks bound to one credential and provider.

    Example:
        assistant = DraftingAssistant(api_key=os.getenv("GEMINI_API_KEY"))
        summary = assistant.generate_summary(personal, job_description)
    """

    def __init__(
        self,
        api_key: Optional[str],
        provider_name: Optional[str] = None,
        model: Optional[str] = None,
        provider: Optional[LLMProvider] = None,
    ):
        self.api_key = api_key
        self.provider_name = provider_name or default_provider_name()
        self.model = model
        self.provider = provider

    def _generate(self, prompt: str, task: str) -> str:
        return generate_text(
            prompt,
            self.api_key,
            provider_name=self.provider_name,
            model=self.model,
            provider=self.provider,
            task=task,
        )

    def generate_summary(self, personal: PersonalInfo, job_description: str = "") -> str:
        """
        Draft a professional summary.

        Targets the job description when one is given; otherwise writes a
        versatile summary for the named person.
        """
        job_description = (job_description or "").strip()
        if not job_description and not personal.full_name.strip():
            raise MissingRequiredFieldError(
                "personal.fullName",
                "Please enter your name or a job description to generate a summary",
            )
        return self._generate(
            prompts.summary_prompt(personal.full_name, job_description), task="summary"
        )

    def enhance_summary(self, summary: str) -> str:
        if not (summary or "").strip():
            raise MissingRequiredFieldError(
                "personal.summary", "Please write a summary first before enhancing it"
            )
        return self._generate(prompts.enhance_summary_prompt(summary), task="enhanced summary")

    def generate_education_description(self, education: Education) -> str:
        _require_degree(education)
        return self._generate(
            prompts.education_description_prompt(education), task="education description"
        )

    def generate_courses(self, education: Education) -> str:
        """
        Draft relevant coursework for a degree.

        Returns:
            Comma-separated course list, normalized to ", " separators
        """
        _require_degree(education)
        response = self._generate(prompts.courses_prompt(education), task="courses")
        return ", ".join(parse_comma_list(response))

    def suggest_skills(
        self, existing: Iterable[str], current_role: str = "", job_description: str = ""
    ) -> List[Skill]:
        """
        Suggest new skills with level and category.

        Suggestions whose name is already present (case-insensitive), or whose
        level or category is not one of the known values, are dropped.

        Raises:
            MissingRequiredFieldError: If neither role nor job description is given
            GenerationFailedError: If the reply is not a JSON array
        """
        current_role = (current_role or "").strip()
        job_description = (job_description or "").strip()
        if not current_role and not job_description:
            raise MissingRequiredFieldError(
                "jobDescription",
                "Please add a job title or job description to get relevant skill suggestions",
            )

        existing = list(existing)
        response = self._generate(
            prompts.skills_prompt(existing, current_role, job_description), task="skills"
        )
        try:
            raw_items = parse_json_array(response)
        except ValueError as e:
            _log_error(f"Could not parse skill suggestions: {e}")
            raise GenerationFailedError("Failed to generate skill suggestions", e) from e

        seen = {name.strip().lower() for name in existing}
        suggestions = []
        for item in raw_items:
            if not isinstance(item, dict):
                continue
            name = str(item.get("name", "")).strip()
            level = item.get("level")
            category = item.get("category")
            if not name or name.lower() in seen:
                continue
            if level not in SKILL_LEVELS or category not in SKILL_CATEGORIES:
                _log_debug(f"Dropped suggestion {name!r} ({level}/{category})")
                continue
            seen.add(name.lower())
            suggestions.append(Skill(name=name, level=level, category=category))

        _log_info(f"{len(suggestions)} new skills suggested")
        return suggestions

    def suggest_interests(self, existing: Iterable[str]) -> List[str]:
        """Up to six short interests not already listed (case-insensitive)."""
        existing = list(existing)
        response = self._generate(
            prompts.interests_prompt(existing, MAX_INTERESTS), task="interests"
        )

        seen = {interest.strip().lower() for interest in existing}
        suggestions = []
        for interest in parse_comma_list(response, max_length=MAX_INTEREST_LENGTH):
            if interest.lower() in seen:
                continue
            seen.add(interest.lower())
            suggestions.append(interest)
        return suggestions[:MAX_INTERESTS]


def _require_degree(education: Education) -> None:
    if not education.degree.strip():
        raise MissingRequiredFieldError("education.degree", "Please enter a degree first")
