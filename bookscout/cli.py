import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from .catalog import load_catalog, load_stop_words
from .config import (
    ensure_config_exists,
    get_config_path,
    load_config,
    update_config,
)
from .decorators import handle_catalog_errors
from .models import BookRecord
from .similarity import Corpus, GenreNormalizer, SimilarityRanker, Tokenizer

# Initialize Rich Traceback for better error messages
install(show_locals=True)

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.INFO,  # DEBUG if verbose
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Content-based book similarity from catalog files")

OUTPUT_FORMATS = ("table", "json")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    bookscout - find books similar to a given title.

    Builds a TF-IDF corpus from a catalog file (JSON, JSON Lines or YAML)
    and ranks books by cosine similarity of their content.
    """
    config = load_config()
    console.no_color = not config.cli.color
    if verbose or config.cli.verbose:
        logging.getLogger("bookscout").setLevel(logging.DEBUG)
        if verbose:
            console.print("[bold green]Verbose mode enabled.[/bold green]")


@app.command()
def about():
    """Display information about bookscout."""
    console.print("[bold cyan]bookscout - Content-Based Book Similarity[/bold cyan]")
    console.print("")
    console.print("Ranks the books of a catalog by similarity to a target book:")
    console.print("  • TF-IDF vectors over title, author, description and genres")
    console.print("  • Cosine similarity ranking with stable tie order")
    console.print("  • Explanations (shared genres, author, rating, era)")
    console.print("  • Optional genre normalization and custom stop words")
    console.print("")
    console.print("[bold]Commands:[/bold]")
    console.print("  bookscout similar <catalog> <id>      Most similar books")
    console.print("  bookscout explain <catalog> <a> <b>   Why two books match")
    console.print("  bookscout terms <catalog> <id>        Heaviest TF-IDF terms")
    console.print("  bookscout config                      Show or edit settings")


# ============================================================================
# Helpers
# ============================================================================

def _load_books(catalog: Path, normalize_genres: Optional[bool]) -> List[BookRecord]:
    config = load_config()
    if normalize_genres is None:
        normalize_genres = config.similarity.normalize_genres
    normalizer = GenreNormalizer() if normalize_genres else None
    return load_catalog(catalog, normalizer=normalizer)


def _build_tokenizer(stop_words: Optional[Path]) -> Tokenizer:
    config = load_config()
    stop_words_file = stop_words or config.similarity.stop_words_file
    words = load_stop_words(stop_words_file) if stop_words_file else None
    return Tokenizer(stop_words=words, min_length=config.similarity.min_token_length)


def _find_book(books: List[BookRecord], book_id: str) -> BookRecord:
    for book in books:
        if book.id == book_id:
            return book
    console.print(f"[red]Error: Book {book_id} not found in catalog[/red]")
    raise typer.Exit(code=1)


def _ranker(books: List[BookRecord], stop_words: Optional[Path]) -> SimilarityRanker:
    config = load_config()
    corpus = Corpus.build(books, _build_tokenizer(stop_words))
    return SimilarityRanker(
        corpus,
        rating_tolerance=config.similarity.rating_tolerance,
        year_window=config.similarity.year_window,
    )


# ============================================================================
# Similarity Commands
# ============================================================================

@app.command(name="similar")
@handle_catalog_errors
def find_similar(
    catalog: Path = typer.Argument(..., help="Catalog file (JSON, JSONL or YAML)"),
    book_id: str = typer.Argument(..., help="Book ID to find similar books for"),
    limit: Optional[int] = typer.Option(None, "--limit", "-k", help="Number of similar books to return"),
    explain: bool = typer.Option(True, "--explain/--no-explain", help="Show why each book matched"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    normalize_genres: Optional[bool] = typer.Option(None, "--normalize-genres/--raw-genres", help="Normalize genre labels before indexing"),
    stop_words: Optional[Path] = typer.Option(None, "--stop-words", help="Stop-word file (text or YAML)"),
):
    """
    Find books similar to the given book.

    Examples:
        # Five most similar books
        bookscout similar catalog.json b42

        # Top 10 as JSON, with normalized genres
        bookscout similar catalog.json b42 -k 10 --format json --normalize-genres
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown format '{output_format}', expected one of: {', '.join(OUTPUT_FORMATS)}")

    books = _load_books(catalog, normalize_genres)
    target = _find_book(books, book_id)
    if limit is None:
        limit = load_config().similarity.default_limit

    ranker = _ranker(books, stop_words)
    results = ranker.find_similar(book_id, books, limit=limit)

    if output_format == "json":
        payload = [
            {
                "book": result.book.to_dict(),
                "similarity": result.similarity,
                "reasons": ranker.explain(target, result.book),
            }
            for result in results
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(f"\n[bold]Finding books similar to:[/bold]")
    console.print(f"  {target.title or '(No title)'}")
    if target.author:
        console.print(f"  [dim]by {target.author}[/dim]")
    console.print()

    if not results:
        console.print("[yellow]No similar books found[/yellow]")
        return

    table = Table(title=f"Top {len(results)} Similar Books")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("Score", justify="right", style="magenta")
    table.add_column("Year", justify="center", style="yellow")
    if explain:
        table.add_column("Why", style="dim")

    for result in results:
        book = result.book
        row = [
            book.id,
            book.title or "(No title)",
            book.author[:40] + "..." if len(book.author) > 40 else book.author,
            f"{result.similarity:.3f}",
            str(book.year) if book.year else "",
        ]
        if explain:
            row.append("\n".join(ranker.explain(target, book)))
        table.add_row(*row)

    console.print(table)


@app.command()
@handle_catalog_errors
def explain(
    catalog: Path = typer.Argument(..., help="Catalog file (JSON, JSONL or YAML)"),
    book_a: str = typer.Argument(..., help="First book ID"),
    book_b: str = typer.Argument(..., help="Second book ID"),
    normalize_genres: Optional[bool] = typer.Option(None, "--normalize-genres/--raw-genres", help="Normalize genre labels before comparing"),
    stop_words: Optional[Path] = typer.Option(None, "--stop-words", help="Stop-word file (text or YAML)"),
):
    """Explain why two books of a catalog are similar."""
    books = _load_books(catalog, normalize_genres)
    first = _find_book(books, book_a)
    second = _find_book(books, book_b)

    ranker = _ranker(books, stop_words)
    score = ranker.corpus.similarity(first.id, second.id)

    console.print(f"[bold]{first.title or first.id}[/bold] vs [bold]{second.title or second.id}[/bold]")
    console.print(f"Content similarity: [magenta]{score:.3f}[/magenta]")
    for reason in ranker.explain(first, second):
        console.print(f"  • {reason}")


@app.command()
@handle_catalog_errors
def terms(
    catalog: Path = typer.Argument(..., help="Catalog file (JSON, JSONL or YAML)"),
    book_id: str = typer.Argument(..., help="Book ID to inspect"),
    top: int = typer.Option(10, "--top", "-n", help="Number of terms to show"),
    stop_words: Optional[Path] = typer.Option(None, "--stop-words", help="Stop-word file (text or YAML)"),
):
    """Show the heaviest TF-IDF terms of a book."""
    books = _load_books(catalog, None)
    book = _find_book(books, book_id)

    corpus = Corpus.build(books, _build_tokenizer(stop_words))
    weighted = corpus.top_terms(book.id, top)
    if not weighted:
        console.print(f"[yellow]No weighted terms for {book.id}[/yellow]")
        return

    table = Table(title=f"Top terms: {book.title or book.id}")
    table.add_column("Term", style="green")
    table.add_column("TF", justify="right")
    table.add_column("IDF", justify="right")
    table.add_column("Weight", justify="right", style="magenta")

    document = corpus.get_document(book.id)
    for term, weight in weighted:
        table.add_row(
            term,
            f"{document.term_frequencies[term]:.3f}",
            f"{corpus.idf[term]:.3f}",
            f"{weight:.4f}",
        )

    console.print(table)
    console.print(f"[dim]{len(corpus)} documents, {len(corpus.vocabulary)} terms in vocabulary[/dim]")


# ============================================================================
# Configuration
# ============================================================================

@app.command()
@handle_catalog_errors
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Create default configuration file"),
    set_limit: Optional[int] = typer.Option(None, "--limit", help="Default number of results"),
    set_rating_tolerance: Optional[float] = typer.Option(None, "--rating-tolerance", help="Max rating gap for 'Similar ratings'"),
    set_year_window: Optional[int] = typer.Option(None, "--year-window", help="Max year gap for 'Similar publication period'"),
    set_min_token_length: Optional[int] = typer.Option(None, "--min-token-length", help="Shortest token kept when indexing"),
    set_stop_words: Optional[str] = typer.Option(None, "--stop-words", help="Default stop-word file"),
    set_normalize_genres: Optional[bool] = typer.Option(None, "--normalize-genres/--raw-genres", help="Normalize genres by default"),
    set_verbose: Optional[bool] = typer.Option(None, "--verbose-default/--quiet-default", help="Verbose logging by default"),
    set_color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Colored output"),
):
    """
    View or edit bookscout configuration.

    Examples:
        bookscout config --show
        bookscout config --limit 10 --stop-words ~/books/stop_words.txt
    """
    if init:
        config_path = ensure_config_exists()
        console.print(f"[green]Configuration initialized at {config_path}[/green]")
        return

    changes = []
    if set_limit is not None:
        if set_limit <= 0:
            raise ValueError("--limit must be positive")
        changes.append(f"Default limit: {set_limit}")
    if set_rating_tolerance is not None:
        changes.append(f"Rating tolerance: {set_rating_tolerance}")
    if set_year_window is not None:
        changes.append(f"Year window: {set_year_window}")
    if set_min_token_length is not None:
        changes.append(f"Min token length: {set_min_token_length}")
    if set_stop_words is not None:
        changes.append(f"Stop-word file: {set_stop_words}")
    if set_normalize_genres is not None:
        changes.append(f"Normalize genres: {set_normalize_genres}")
    if set_verbose is not None:
        changes.append(f"CLI verbose: {set_verbose}")
    if set_color is not None:
        changes.append(f"CLI color: {set_color}")

    if show or not changes:
        current = load_config()
        console.print(f"\n[bold]bookscout Configuration[/bold]")
        console.print(f"[dim]Location: {get_config_path()}[/dim]\n")

        console.print("[bold cyan]Similarity Settings:[/bold cyan]")
        console.print(f"  Default Limit:    {current.similarity.default_limit}")
        console.print(f"  Rating Tolerance: {current.similarity.rating_tolerance}")
        console.print(f"  Year Window:      {current.similarity.year_window}")
        console.print(f"  Min Token Length: {current.similarity.min_token_length}")
        console.print(f"  Stop Words:       {current.similarity.stop_words_file or '[dim]built-in[/dim]'}")
        console.print(f"  Normalize Genres: {current.similarity.normalize_genres}")

        console.print("\n[bold cyan]CLI Settings:[/bold cyan]")
        console.print(f"  Verbose:          {current.cli.verbose}")
        console.print(f"  Color:            {current.cli.color}")
        if not changes:
            return

    console.print("[blue]Updating configuration:[/blue]")
    for change in changes:
        console.print(f"  • {change}")

    update_config(
        default_limit=set_limit,
        rating_tolerance=set_rating_tolerance,
        year_window=set_year_window,
        min_token_length=set_min_token_length,
        stop_words_file=set_stop_words,
        normalize_genres=set_normalize_genres,
        cli_verbose=set_verbose,
        cli_color=set_color,
    )
    console.print("[green]✓ Configuration updated![/green]")


if __name__ == "__main__":
    app()
