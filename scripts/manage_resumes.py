#!/usr/bin/env python3
"""
Command-line interface for the resume store.

The resume store (data/vitae.db by default, see VITAE_DB_PATH) keeps one row
per resume, keyed by resume id and owning user.

Commands:
    save   - Save a resume document file (insert, or update with --id)
    show   - Print or write out a stored resume (latest by default)
    list   - List a user's resumes, newest first
    delete - Delete a stored resume
    export - Export a stored resume to PDF
"""

import json
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.editing import (
    ResumeRecord,
    document_to_dict,
    load_document_file,
    save_document_file,
)
from vitae.contexts.persistence import ResumeStore
from vitae.contexts.persistence.logger import setup_persistence_logger
from vitae.contexts.rendering import export_resume
from vitae.contexts.rendering.config import load_layout_config
from vitae.exceptions import VitaeError
from vitae.utils import format_timestamp, now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("VITAE_RESULTS_PATH", "outs/results"))
DB_PATH = Path(os.getenv("VITAE_DB_PATH", "data/vitae.db"))

app = typer.Typer(
    add_completion=False,
    help="Manage stored resumes (save, show, list, delete, export)",
    invoke_without_command=True,
)

UserOption = Annotated[str, typer.Option("--user", "-u", help="Owner of the resume")]
IdOption = Annotated[
    Optional[int], typer.Option("--id", help="Resume id (default: most recently updated)")
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def open_store() -> ResumeStore:
    setup_persistence_logger(LOGS_PATH / f"store_{now()}", DB_PATH)
    try:
        return ResumeStore(DB_PATH)
    except VitaeError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def fetch_or_exit(store: ResumeStore, user: str, resume_id: Optional[int]) -> ResumeRecord:
    record = store.fetch_latest_or_by_id(user, resume_id)
    if record is None:
        target = f"Resume {resume_id}" if resume_id is not None else "No resume"
        typer.secho(f"{target} found for user {user}\n", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    return record


@app.command("save")
def save_command(
    resume_file: Annotated[Path, typer.Argument(help="Resume document (.json, .yaml or .yml)")],
    user: UserOption,
    resume_id: Annotated[
        Optional[int], typer.Option("--id", help="Update this resume instead of inserting")
    ] = None,
    job_file: Annotated[
        Optional[Path], typer.Option("--job", "-j", help="Job description text file to store")
    ] = None,
    template_id: Annotated[int, typer.Option("--template", help="Template id")] = 0,
):
    """Save a resume document file to the store."""
    try:
        document = load_document_file(resume_file)
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    record = ResumeRecord(
        user_id=user,
        document=document,
        id=resume_id,
        template_id=template_id,
        job_description=job_file.read_text(encoding="utf-8") if job_file else "",
    )

    with open_store() as store:
        try:
            saved_id = store.upsert(record)
        except VitaeError as e:
            typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"\n✓ Saved '{record.title}' as resume {saved_id}\n", fg=typer.colors.GREEN)


@app.command("show")
def show_command(
    user: UserOption,
    resume_id: IdOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the document to a .json/.yaml file"),
    ] = None,
):
    """Print a stored resume as JSON, or write it to a file."""
    with open_store() as store:
        record = fetch_or_exit(store, user, resume_id)

    if output:
        save_document_file(record.document, output)
        typer.secho(f"\n✓ Wrote resume {record.id} to {output}\n", fg=typer.colors.GREEN)
        return

    typer.secho(f"\n{record.title} (id {record.id})", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Updated: {format_timestamp(record.updated_at)}\n")
    typer.echo(json.dumps(document_to_dict(record.document), indent=2, ensure_ascii=False))


@app.command("list")
def list_command(user: UserOption):
    """List a user's resumes, newest first."""
    with open_store() as store:
        rows = store.list_resumes(user)

    if not rows:
        typer.echo(f"\nNo resumes for user {user}\n")
        return

    typer.secho(f"\nResumes for {user}: {len(rows)}", fg=typer.colors.BLUE, bold=True)
    for row in rows:
        updated = format_timestamp(row["updated_at"], relative=True)
        typer.echo(f"  {row['id']:>4}  {updated:>10}  {row['title']}")
    typer.echo("")


@app.command("delete")
def delete_command(
    user: UserOption,
    resume_id: Annotated[int, typer.Option("--id", help="Resume id to delete")],
):
    """Delete a stored resume."""
    with open_store() as store:
        deleted = store.delete(user, resume_id)

    if not deleted:
        typer.secho(f"\nResume {resume_id} not found for user {user}\n", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    typer.secho(f"\n✓ Deleted resume {resume_id}\n", fg=typer.colors.GREEN)


@app.command("export")
def export_command(
    user: UserOption,
    resume_id: IdOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF file or directory"),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset to apply (repeatable)"),
    ] = None,
):
    """
    Export a stored resume to PDF.

    The stored job description, if any, is embedded for ATS keyword matching.
    """
    with open_store() as store:
        record = fetch_or_exit(store, user, resume_id)

    try:
        result = export_resume(
            record.document,
            output_path=output or RESULTS_PATH / today(),
            job_description=record.job_description,
            config=load_layout_config(presets=presets or []),
        )
    except (VitaeError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("\n✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {result.pdf_path}\n")


if __name__ == "__main__":
    app()
