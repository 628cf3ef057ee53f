"""
Resume Pipeline Command Line Interface

Provides CLI commands for parsing resumes, re-parsing stored documents and
inspecting configuration.
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from resume_pipeline.errors import ResumePipelineError

app = typer.Typer(
    name="resume-pipeline",
    help="Rule-based resume parsing pipeline CLI",
    add_completion=False,
)
console = Console()


def _confidence_style(value: float) -> str:
    if value >= 0.8:
        return "green"
    if value >= 0.6:
        return "yellow"
    return "red"


def _read_file(path: Path) -> bytes:
    if not path.is_file():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)
    return path.read_bytes()


def _print_parsed(parsed, document_url: Optional[str] = None, quality_report=None) -> None:
    """Render a parsed resume as tables."""
    info = parsed.personal_info
    name = " ".join(part for part in (info.first_name, info.last_name) if part)

    summary = Table(title="Parsed Resume", show_header=False)
    summary.add_column("Field", style="cyan")
    summary.add_column("Value")
    summary.add_row("Name", name or "[dim]-[/dim]")
    summary.add_row("Email", info.email or "[dim]-[/dim]")
    summary.add_row("Phone", info.phone or "[dim]-[/dim]")
    if info.location:
        summary.add_row("Location", ", ".join(p for p in (info.location.city, info.location.state) if p))
    summary.add_row("Skills", ", ".join(parsed.skills) or "[dim]-[/dim]")
    summary.add_row("Certifications", ", ".join(c.name for c in parsed.certifications) or "[dim]-[/dim]")
    if document_url:
        summary.add_row("Document", document_url)
    console.print(summary)

    if parsed.work_experience:
        jobs = Table(title="Work Experience")
        jobs.add_column("Title", style="cyan")
        jobs.add_column("Company")
        jobs.add_column("Dates")
        for job in parsed.work_experience:
            end = "Present" if job.current else (job.end_date or "")
            jobs.add_row(job.title, job.company, f"{job.start_date or ''} - {end}".strip(" -"))
        console.print(jobs)

    if parsed.education:
        schools = Table(title="Education")
        schools.add_column("Institution", style="cyan")
        schools.add_column("Degree")
        schools.add_column("GPA")
        for edu in parsed.education:
            schools.add_row(edu.institution, edu.degree or "", edu.gpa or "")
        console.print(schools)

    confidence = parsed.confidence
    scores = Table(title="Confidence")
    scores.add_column("Section", style="cyan")
    scores.add_column("Score", justify="right")
    for label, value in (
        ("Personal Info", confidence.personal_info),
        ("Work Experience", confidence.work_experience),
        ("Education", confidence.education),
        ("Skills", confidence.skills),
        ("Overall", confidence.overall),
    ):
        style = _confidence_style(value)
        scores.add_row(label, f"[{style}]{value:.2f}[/{style}]")
    console.print(scores)

    if parsed.needs_manual_review:
        console.print("[bold yellow]Manual review required[/bold yellow]")
    else:
        console.print("[bold green]No manual review needed[/bold green]")

    if quality_report:
        for issue in quality_report.issues:
            console.print(f"  [red]✗[/red] {issue}")
        for suggestion in quality_report.suggestions:
            console.print(f"  [yellow]•[/yellow] {suggestion}")
        for strength in quality_report.strengths:
            console.print(f"  [green]✓[/green] {strength}")


@app.command()
def version():
    """Show application version."""
    from resume_pipeline import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from resume_pipeline.utils.config import get_settings

    settings = get_settings()

    table = Table(title="Resume Pipeline Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Storage Provider", settings.storage.provider)
    table.add_row("Storage Bucket", settings.storage.bucket_name)
    table.add_row("Database", settings.database.display_address)
    table.add_row("Max File Size", f"{settings.parser.max_file_size_mb} MB")
    table.add_row("Min Text Length", str(settings.parser.min_text_length))
    table.add_row("Ruleset", str(settings.parser.ruleset_path or "built-in"))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command("health-check")
def health_check():
    """Check document storage connectivity."""
    from resume_pipeline.data.database import DatabaseManager
    from resume_pipeline.services.storage import resolve_storage_provider
    from resume_pipeline.utils.config import get_settings

    console.print("[bold cyan]System Health Check[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")

    settings = get_settings()
    provider = resolve_storage_provider(settings)

    console.print("\n[bold]Document Storage:[/bold]")
    if provider != "gridfs":
        console.print("  [yellow]○[/yellow] Local in-process storage (documents are not persisted)")
        return

    manager = DatabaseManager(settings.database)
    try:
        healthy = asyncio.run(manager.ping())
    finally:
        manager.close()

    if not healthy:
        console.print(f"  [red]✗[/red] MongoDB not reachable at {settings.database.display_address}")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] MongoDB connected")
    console.print(f"    Address: {settings.database.display_address}")
    console.print(f"    Bucket: {settings.storage.bucket_name}")


@app.command("supported-types")
def supported_types():
    """List accepted file extensions and media types."""
    from resume_pipeline.utils.constants import MIME_TYPE_BY_EXTENSION, SUPPORTED_EXTENSIONS

    table = Table(title="Supported Resume Formats")
    table.add_column("Extension", style="cyan")
    table.add_column("Media Type", style="green")
    for extension in SUPPORTED_EXTENSIONS:
        table.add_row(extension, MIME_TYPE_BY_EXTENSION[extension])

    console.print(table)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Path to resume file"),
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Owner key for the stored document"),
    media_type: Optional[str] = typer.Option(
        None, "--media-type", "-m", help="Declared media type (default: inferred from extension)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the response envelope as JSON"),
):
    """Parse a resume file."""
    from resume_pipeline.core.pipeline import get_resume_pipeline, media_type_for_filename

    content = _read_file(path)
    pipeline = get_resume_pipeline()

    try:
        result = asyncio.run(
            pipeline.parse(content, media_type or media_type_for_filename(path.name), path.name, owner)
        )
    except ResumePipelineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    response = pipeline.build_parse_response(result)
    if as_json:
        console.print_json(data=response.to_wire())
        return

    console.print(f"[green]{response.message}[/green]")
    _print_parsed(result.parsed_resume, result.document_url, result.quality_report)


@app.command()
def reparse(
    url: str = typer.Argument(..., help="Document URL returned by a previous parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed resume as JSON"),
):
    """Re-parse a stored resume document."""
    from resume_pipeline.core.pipeline import get_resume_pipeline

    try:
        parsed = asyncio.run(get_resume_pipeline().reparse(url))
    except ResumePipelineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(data=parsed.to_wire())
        return

    _print_parsed(parsed)


@app.command()
def candidate(
    path: Path = typer.Argument(..., help="Path to resume file"),
    source_type: Optional[str] = typer.Option(None, "--source-type", help="Candidate source type"),
    gdpr_consent: bool = typer.Option(False, "--gdpr-consent", help="Record GDPR consent"),
):
    """Parse a resume and print the candidate creation payload."""
    from resume_pipeline.core.pipeline import get_resume_pipeline, media_type_for_filename
    from resume_pipeline.data.models import CandidateOverrides

    content = _read_file(path)
    pipeline = get_resume_pipeline()

    try:
        result = asyncio.run(pipeline.parse(content, media_type_for_filename(path.name), path.name))
    except ResumePipelineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    payload = pipeline.map_to_candidate_payload(
        result.parsed_resume,
        CandidateOverrides(source_type=source_type, gdpr_consent=gdpr_consent),
    )
    if not payload.can_be_created:
        console.print("[yellow]Email is required to create a candidate. Please provide it manually.[/yellow]")

    console.print_json(data=payload.to_wire())


if __name__ == "__main__":
    app()
