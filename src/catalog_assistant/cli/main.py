"""
CLI Main - Typer command-line interface.
========================================

Commands:
- query: Ask one question
- chat: Interactive question loop
- courses: List catalog courses
- search: Raw similarity search with scores
- info: Show configuration and data status
- gui: Launch the Streamlit app
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from catalog_assistant.shared.logging import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="catalog-assistant",
    help="""🎓 Catalog Assistant - Q&A for UNH graduate ACFI courses

Answers questions about Accounting & Finance courses from a local course
catalog using keyword-vector retrieval and rule-based intents.

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

COMMANDS OVERVIEW:

  query    Ask a single question
           -f, --format       Output format: markdown, html or json
           --no-sources       Hide the cited courses table

  chat     Ask questions interactively (exit, quit, clear, status)
           --save-transcript  Write the conversation to a JSON file

  courses  List courses, optionally by category
           -c, --category     finance or accounting

  search   Show raw retrieval hits with similarity scores
           -k, --top-k        Number of hits (default: 5)

  info     Show configuration and catalog status

  gui      Launch interactive Streamlit web interface

━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

QUICK START:

  catalog-assistant query "Tell me about ACFI 801"
  catalog-assistant courses -c finance
  catalog-assistant --catalog my_courses.yaml chat

Use 'catalog-assistant <command> --help' for detailed command options.
""",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


# ─────────────────────────────────────────────────────────────────────────────
# Shared Options
# ─────────────────────────────────────────────────────────────────────────────


@app.callback()
def main(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Option(
        None,
        "--catalog",
        help="Catalog file (JSON, JSONL or YAML). Default: configured or bundled catalog.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show debug logging.",
    ),
):
    """Global options shared by every command."""
    from catalog_assistant.shared.logging import configure_logging

    configure_logging(verbose=verbose)

    if catalog is not None and not catalog.exists():
        console.print(f"[red]Catalog file not found: {catalog}[/red]")
        raise typer.Exit(1)

    ctx.obj = {"catalog": catalog}


def _make_assistant(ctx: typer.Context, output_format: str = "markdown"):
    """Build a CourseAssistant for the --catalog in effect."""
    from catalog_assistant.ingestion.loader import catalog_loader
    from catalog_assistant.rag.assistant import CourseAssistant

    catalog = (ctx.obj or {}).get("catalog")
    loader = catalog_loader(catalog) if catalog is not None else None
    return CourseAssistant(loader=loader, output_format=output_format)


def _print_answer(response) -> None:
    from catalog_assistant.rag.formatting import render_markdown

    console.print(Panel(Markdown(render_markdown(response)), title="💬 Answer", border_style="green"))


def _print_sources(assistant, codes: list[str]) -> None:
    table = Table(show_header=True)
    table.add_column("Course", style="cyan")
    table.add_column("Title")

    for code in codes:
        course = assistant.corpus.get(code)
        table.add_row(code, course.title if course else "")

    console.print("\n[bold]📚 Sources:[/bold]")
    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Query Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def query(
    ctx: typer.Context,
    question: str = typer.Argument(
        ...,
        help="Question about ACFI courses (wrap in quotes).",
    ),
    output_format: str = typer.Option(
        "markdown",
        "--format", "-f",
        help="Output format: markdown (pretty), html or json (raw, pipe-friendly).",
    ),
    show_sources: bool = typer.Option(
        True,
        "--sources/--no-sources",
        help="Display the courses the answer was retrieved from.",
    ),
):
    """
    💬 Ask a question about ACFI courses.

    Examples:
        catalog-assistant query "Tell me about ACFI 801"
        catalog-assistant query "Compare ACFI 840 and ACFI 850"
        catalog-assistant query "list all finance courses" -f json
    """
    from catalog_assistant.rag.formatting import render
    from catalog_assistant.shared.config import OUTPUT_FORMATS

    fmt = output_format.lower()
    if fmt not in OUTPUT_FORMATS:
        console.print(
            f"[red]Unknown format '{output_format}'. Choose from: {', '.join(OUTPUT_FORMATS)}[/red]"
        )
        raise typer.Exit(1)

    assistant = _make_assistant(ctx)
    response = assistant.ask(question)

    if not assistant.initialized:
        console.print("[yellow]⚠ Course catalog could not be loaded; answers are empty.[/yellow]")

    if fmt != "markdown":
        typer.echo(render(response, fmt))
        return

    console.print(f"\n[bold]Question:[/bold] {question}\n")
    _print_answer(response)

    if show_sources and response.sources:
        _print_sources(assistant, response.sources)


# ─────────────────────────────────────────────────────────────────────────────
# Chat Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def chat(
    ctx: typer.Context,
    save_transcript: Optional[Path] = typer.Option(
        None,
        "--save-transcript", "-s",
        help="Write the conversation to this JSON file on exit.",
    ),
):
    """
    🗨️ Chat with the assistant.

    Type a question and press Enter. Special inputs:
      • exit / quit  - leave the chat
      • clear        - forget the conversation so far
      • status       - show catalog and session status
    """
    from catalog_assistant.shared.utils import save_json

    assistant = _make_assistant(ctx)
    if not assistant.initialize():
        console.print("[yellow]⚠ Course catalog could not be loaded; answers will be empty.[/yellow]")

    console.print(Panel(
        f"{assistant.greeting()}\n\n{assistant.help_text()}\n\n"
        f"[dim]{assistant.data_status_message()}[/dim]",
        title="🎓 Catalog Assistant",
    ))

    while True:
        try:
            text = console.input("[bold cyan]You:[/bold cyan] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not text:
            continue

        command = text.lower()
        if command in ("exit", "quit"):
            break
        if command == "clear":
            assistant.clear_history()
            console.print("[dim]Conversation cleared.[/dim]")
            continue
        if command == "status":
            status = assistant.get_status()
            console.print(
                f"[dim]Initialized: {status['initialized']} | "
                f"Turns: {status['conversation_length']} | "
                f"{assistant.data_status_message()}[/dim]"
            )
            continue

        _print_answer(assistant.ask(text))

    if save_transcript:
        save_json(save_transcript, assistant.transcript.to_records())
        console.print(f"[green]✓ Transcript saved to {save_transcript}[/green]")

    console.print("[dim]Goodbye![/dim]")


# ─────────────────────────────────────────────────────────────────────────────
# Courses Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def courses(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(
        None,
        "--category", "-c",
        help="Only courses in this category (finance, accounting).",
    ),
):
    """
    📋 List catalog courses.

    Examples:
        catalog-assistant courses
        catalog-assistant courses -c accounting
    """
    assistant = _make_assistant(ctx)
    if not assistant.initialize():
        console.print("[red]Course catalog could not be loaded.[/red]")
        raise typer.Exit(1)

    corpus = assistant.corpus
    if category:
        if category.lower() not in corpus.categories:
            console.print(
                f"[red]Unknown category '{category}'. "
                f"Available: {', '.join(corpus.categories)}[/red]"
            )
            raise typer.Exit(1)
        selected = corpus.by_category(category)
        title = f"{category.lower()} courses"
    else:
        selected = corpus.all()
        title = "All courses"

    table = Table(title=f"{title} ({len(selected)})")
    table.add_column("Code", style="cyan")
    table.add_column("Title")
    table.add_column("Credits", justify="right")

    for course in selected:
        table.add_row(course.code, course.title, str(course.credits))

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Search Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def search(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Search text."),
    top_k: Optional[int] = typer.Option(
        None,
        "--top-k", "-k",
        help="Number of hits to show. Default: retrieval.top_k from config.",
    ),
):
    """
    🔎 Show raw retrieval hits with similarity scores.

    Bypasses intent handling; useful for checking what the index matches.
    """
    from catalog_assistant.shared.utils import truncate_text

    assistant = _make_assistant(ctx)
    hits = assistant.search(text, top_k=top_k)

    if not hits:
        console.print("[yellow]No matching documents.[/yellow]")
        raise typer.Exit(0)

    table = Table(show_header=True)
    table.add_column("Course", style="cyan")
    table.add_column("Kind")
    table.add_column("Score", justify="right")
    table.add_column("Text")

    for hit in hits:
        table.add_row(
            hit.source_code,
            hit.document_kind.value,
            f"{hit.similarity:.3f}",
            truncate_text(hit.text, 70),
        )

    console.print(table)


# ─────────────────────────────────────────────────────────────────────────────
# Info Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def info(ctx: typer.Context):
    """
    ℹ️ Show configuration and catalog status.

    Useful for debugging and verifying setup.
    """
    from catalog_assistant import __version__
    from catalog_assistant.shared.config import DEFAULT_CONFIG_FILE, get_settings

    settings = get_settings()
    catalog = (ctx.obj or {}).get("catalog") or settings.get_effective_catalog_file()

    console.print(Panel(
        f"[bold]Catalog Assistant[/bold]\n"
        f"Version: {__version__}\n"
        f"Config: {DEFAULT_CONFIG_FILE} [{'✓' if DEFAULT_CONFIG_FILE.exists() else '✗'}]\n"
        f"Catalog: {catalog} [{'✓' if Path(catalog).exists() else '✗'}]",
        title="ℹ️ Info",
    ))

    console.print("\n[bold]Retrieval:[/bold]")
    console.print(f"  index backend: {settings.retrieval.index_backend}")
    console.print(f"  search top_k: {settings.get_effective_top_k()}")
    console.print(f"  answer top_k: {settings.retrieval.pipeline_top_k}")
    console.print(f"  similarity threshold: {settings.get_effective_threshold()}")
    console.print(f"  output format: {settings.get_effective_output_format()}")

    console.print("\n[bold]Categories:[/bold]")
    table = Table()
    table.add_column("Category")
    table.add_column("Keywords")
    for tag, keywords in settings.categories.items():
        table.add_row(tag, ", ".join(keywords))
    console.print(table)

    assistant = _make_assistant(ctx)
    assistant.initialize()
    status = assistant.corpus.data_status()

    console.print("\n[bold]Data:[/bold]")
    console.print(f"  courses: {status['total_courses']}")
    console.print(f"  documents: {status['total_documents']}")
    console.print(f"  source: {status['catalog_source']}")
    console.print(f"  {assistant.data_status_message()}")


# ─────────────────────────────────────────────────────────────────────────────
# GUI Command
# ─────────────────────────────────────────────────────────────────────────────


@app.command()
def gui():
    """
    🖥️ Launch Streamlit web interface.

    The GUI runs at http://localhost:8501 by default.
    Press Ctrl+C to stop the server.
    """
    import subprocess
    import sys

    app_path = Path(__file__).parent.parent / "app" / "streamlit_app.py"

    console.print("[bold]🚀 Launching Catalog Assistant GUI...[/bold]")
    console.print(f"[dim]Running: streamlit run {app_path}[/dim]\n")

    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)])


# ─────────────────────────────────────────────────────────────────────────────
# Entry Point
# ─────────────────────────────────────────────────────────────────────────────


def cli():
    """CLI entry point."""
    app()


if __name__ == "__main__":
    cli()
