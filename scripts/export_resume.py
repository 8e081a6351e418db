#!/usr/bin/env python3
"""
Resume Export CLI

Exports a resume document (JSON or YAML) to PDF, or renders an HTML preview,
using the rendering context.

Commands:
    export  - Export a resume document to PDF
    preview - Render a scaled HTML preview

Examples:\n

    export_resume.py export data/jane_doe.json                          # Export to outs/results/<date>/

    export_resume.py export data/jane_doe.json -j job.txt               # Embed job keywords for ATS

    export_resume.py export data/jane_doe.yaml -p page_letter -o cv.pdf # US Letter, explicit output

    export_resume.py preview data/jane_doe.json --scale 0.8             # HTML preview at 80%
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.editing import load_document_file
from vitae.contexts.rendering import export_resume, render_preview
from vitae.contexts.rendering.config import available_presets, load_layout_config
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.exceptions import VitaeError
from vitae.utils import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("VITAE_RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Export resume documents to PDF and render HTML previews",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def read_job_description(job_file: Optional[Path]) -> Optional[str]:
    if job_file is None:
        return None
    if not job_file.exists():
        typer.secho(
            f"Error: Job description not found: {job_file}\n", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    return job_file.read_text(encoding="utf-8")


@app.command("export")
def export_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume document (.json, .yaml or .yml)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output PDF file or directory (default: outs/results/<date>/)",
        ),
    ] = None,
    job_file: Annotated[
        Optional[Path],
        typer.Option(
            "--job",
            "-j",
            help="Job description text file to embed for ATS keyword matching",
        ),
    ] = None,
    presets: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset to apply (repeatable, later overrides earlier)",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log sanitizer warnings for suspicious text"),
    ] = False,
):
    """
    Export a resume document to PDF.

    Examples:\n

        $ export_resume.py export data/jane_doe.json                 # Default layout

        $ export_resume.py export data/jane_doe.json -p ats_dense    # Apply a layout preset
    """
    presets = presets or []
    try:
        config = load_layout_config(presets=presets)
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    config.debug = config.debug or debug
    setup_rendering_logger(LOGS_PATH / f"export_{now()}", config, presets)

    typer.secho(f"\nExporting: {resume_file}", fg=typer.colors.BLUE, bold=True)
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    job_description = read_job_description(job_file)
    try:
        document = load_document_file(resume_file)
        result = export_resume(
            document,
            output_path=output or RESULTS_PATH / today(),
            job_description=job_description,
            config=config,
        )
    except (VitaeError, ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  Sections: {', '.join(result.sections)}")
    if result.ats_characters:
        typer.echo(f"  ATS keywords: {result.ats_characters} characters embedded")
    typer.echo(f"  PDF: {result.pdf_path}")
    typer.echo("")


@app.command("preview")
def preview_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume document (.json, .yaml or .yml)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output HTML file (default: next to the input)"),
    ] = None,
    scale: Annotated[
        float,
        typer.Option("--scale", "-s", help="Preview size relative to the page", min=0.1, max=2.0),
    ] = 0.6,
    presets: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset to apply (repeatable)"),
    ] = None,
):
    """
    Render an HTML preview of a resume document.

    Examples:\n

        $ export_resume.py preview data/jane_doe.json                # 60% scale

        $ export_resume.py preview data/jane_doe.json -o cv.html -s 1
    """
    try:
        config = load_layout_config(presets=presets or [])
        document = load_document_file(resume_file)
        html = render_preview(document, scale=scale, config=config)
    except (VitaeError, ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output = output or resume_file.with_suffix(".html")
    output.write_text(html, encoding="utf-8")
    typer.secho(f"\n✓ Preview written: {output}\n", fg=typer.colors.GREEN, bold=True)


@app.command("presets")
def presets_command():
    """List available layout presets."""
    typer.secho("\nLayout presets:", fg=typer.colors.BLUE, bold=True)
    for name in available_presets():
        typer.echo(f"  - {name}")
    typer.echo("")


if __name__ == "__main__":
    app()
