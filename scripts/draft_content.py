#!/usr/bin/env python3
"""
AI Drafting CLI

Drafts resume content for a resume document file with the drafting context.
The API key is read from <PROVIDER>_API_KEY (e.g., GEMINI_API_KEY); the
provider defaults to $LLM_PROVIDER or gemini.

Commands:
    summary   - Draft a professional summary (targeted with --job)
    enhance   - Rewrite the existing summary
    education - Draft a description for one education entry
    courses   - Draft relevant coursework for one education entry
    skills    - Suggest new skills with level and category
    interests - Suggest new interests

Pass --apply to write the result back into the document file.

Examples:\n

    draft_content.py summary data/jane_doe.json -j job.txt --apply

    draft_content.py courses data/jane_doe.json --index 0

    draft_content.py skills data/jane_doe.json --role "Data Engineer" --provider anthropic
"""

import os
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.drafting import DraftingAssistant
from vitae.contexts.drafting.assistant import default_provider_name
from vitae.contexts.drafting.logger import setup_drafting_logger
from vitae.contexts.editing import (
    ResumeFormStore,
    SkillSet,
    load_document_file,
    save_document_file,
)
from vitae.exceptions import VitaeError
from vitae.utils import now

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Draft resume content with an LLM provider",
    add_completion=False,
    invoke_without_command=True,
)

ResumeArgument = Annotated[Path, typer.Argument(help="Resume document (.json, .yaml or .yml)")]
ProviderOption = Annotated[
    Optional[str],
    typer.Option("--provider", help="LLM provider: gemini, anthropic or openai"),
]
ModelOption = Annotated[Optional[str], typer.Option("--model", "-m", help="Model override")]
ApplyOption = Annotated[
    bool, typer.Option("--apply", "-a", help="Write the result back into the document file")
]
IndexOption = Annotated[int, typer.Option("--index", "-i", help="Education entry (0-based)")]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def fail(message) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def make_assistant(provider: Optional[str], model: Optional[str]) -> DraftingAssistant:
    provider = (provider or default_provider_name()).lower()
    setup_drafting_logger(LOGS_PATH / f"draft_{now()}", provider)
    return DraftingAssistant(
        api_key=os.getenv(f"{provider.upper()}_API_KEY"), provider_name=provider, model=model
    )


def open_form(resume_file: Path) -> ResumeFormStore:
    try:
        return ResumeFormStore(load_document_file(resume_file))
    except (ValueError, FileNotFoundError) as e:
        fail(e)


def education_entry(form: ResumeFormStore, index: int):
    education = form.document.education
    if not 0 <= index < len(education):
        fail(f"Education entry {index} not found ({len(education)} entries)")
    return education[index]


def replace_education(form: ResumeFormStore, index: int, **fields) -> None:
    records = list(form.document.education)
    records[index] = replace(records[index], **fields)
    form.update_education(records)


def finish(form: ResumeFormStore, resume_file: Path, apply: bool) -> None:
    if apply:
        save_document_file(form.document, resume_file)
        typer.secho(f"\n✓ Updated {resume_file}\n", fg=typer.colors.GREEN)
    else:
        typer.echo("\n(Use --apply to write this into the document)\n")


@app.command("summary")
def summary_command(
    resume_file: ResumeArgument,
    job_file: Annotated[
        Optional[Path], typer.Option("--job", "-j", help="Job description text file to target")
    ] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """Draft a professional summary, targeted when a job description is given."""
    form = open_form(resume_file)
    assistant = make_assistant(provider, model)
    job_description = job_file.read_text(encoding="utf-8") if job_file else ""

    try:
        summary = assistant.generate_summary(form.document.personal, job_description)
    except VitaeError as e:
        fail(e)

    typer.secho("\nSummary:", fg=typer.colors.BLUE, bold=True)
    typer.echo(summary)
    form.update_personal(summary=summary)
    finish(form, resume_file, apply)


@app.command("enhance")
def enhance_command(
    resume_file: ResumeArgument,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """Rewrite the document's summary to be stronger and more ATS-friendly."""
    form = open_form(resume_file)
    assistant = make_assistant(provider, model)

    try:
        summary = assistant.enhance_summary(form.document.personal.summary)
    except VitaeError as e:
        fail(e)

    typer.secho("\nEnhanced summary:", fg=typer.colors.BLUE, bold=True)
    typer.echo(summary)
    form.update_personal(summary=summary)
    finish(form, resume_file, apply)


@app.command("education")
def education_command(
    resume_file: ResumeArgument,
    index: IndexOption = 0,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """Draft a description for one education entry."""
    form = open_form(resume_file)
    entry = education_entry(form, index)
    assistant = make_assistant(provider, model)

    try:
        description = assistant.generate_education_description(entry)
    except VitaeError as e:
        fail(e)

    typer.secho(f"\nDescription for {entry.degree}:", fg=typer.colors.BLUE, bold=True)
    typer.echo(description)
    replace_education(form, index, description=description)
    finish(form, resume_file, apply)


@app.command("courses")
def courses_command(
    resume_file: ResumeArgument,
    index: IndexOption = 0,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """Draft relevant coursework for one education entry."""
    form = open_form(resume_file)
    entry = education_entry(form, index)
    assistant = make_assistant(provider, model)

    try:
        courses = assistant.generate_courses(entry)
    except VitaeError as e:
        fail(e)

    typer.secho(f"\nCourses for {entry.degree}:", fg=typer.colors.BLUE, bold=True)
    typer.echo(courses)
    replace_education(form, index, courses=courses)
    finish(form, resume_file, apply)


@app.command("skills")
def skills_command(
    resume_file: ResumeArgument,
    role: Annotated[Optional[str], typer.Option("--role", "-r", help="Current role")] = None,
    job_file: Annotated[
        Optional[Path], typer.Option("--job", "-j", help="Job description text file")
    ] = None,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """
    Suggest new skills with level and category.

    The role defaults to the position of the first experience entry.
    """
    form = open_form(resume_file)
    document = form.document
    if role is None and document.experience:
        role = document.experience[0].position
    assistant = make_assistant(provider, model)
    job_description = job_file.read_text(encoding="utf-8") if job_file else ""

    try:
        suggestions = assistant.suggest_skills(document.skills.names, role or "", job_description)
    except VitaeError as e:
        fail(e)

    typer.secho(f"\nSuggested skills: {len(suggestions)}", fg=typer.colors.BLUE, bold=True)
    for skill in suggestions:
        typer.echo(f"  - {skill.name} ({skill.level}, {skill.category})")

    if not document.skills.items:
        form.update_skills(SkillSet.enhanced(suggestions))
    else:
        for skill in suggestions:
            form.add_skill(skill)
    finish(form, resume_file, apply)


@app.command("interests")
def interests_command(
    resume_file: ResumeArgument,
    provider: ProviderOption = None,
    model: ModelOption = None,
    apply: ApplyOption = False,
):
    """Suggest up to six new interests."""
    form = open_form(resume_file)
    assistant = make_assistant(provider, model)

    try:
        suggestions = assistant.suggest_interests(form.document.interests)
    except VitaeError as e:
        fail(e)

    typer.secho(f"\nSuggested interests: {len(suggestions)}", fg=typer.colors.BLUE, bold=True)
    for interest in suggestions:
        typer.echo(f"  - {interest}")
        form.add_interest(interest)
    finish(form, resume_file, apply)


if __name__ == "__main__":
    app()
