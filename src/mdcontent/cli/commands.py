"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdcontent.config import Settings, load_config
from mdcontent.core.export import build_sidecar
from mdcontent.core.parse import parse_file
from mdcontent.core.pipeline import run_check, run_export, run_format, run_index
from mdcontent.core.validate import Severity, has_errors
from mdcontent.crud.database import init_db, make_engine, reset_db
from mdcontent.crud.documents import find_by_term, term_counts
from mdcontent.errors import ContentError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to parse")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Print a document's metadata and block structure as JSON."""
    settings = _settings(overrides={"parser_config": parser})
    if not path.is_file():
        _fail(f"Not a file: {path}")
    try:
        doc = parse_file(path, settings.parser_config, settings.slug_source)
        output = json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False)
    except (ContentError, UnicodeDecodeError) as e:
        _fail("Parse failed", e)
    except (TypeError, ValueError) as e:
        _fail(f"Failed to encode {path}", e)
    typer.echo(output)


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    strict: Annotated[bool, typer.Option("--strict", help="Treat warnings as errors")] = False,
    ):
    """Validate front matter, taxonomy, and local links. Exits 1 on errors."""
    settings = _settings()
    try:
        results = run_check(path, settings)
    except RuntimeError as e:
        _fail(str(e))

    failed = warnings = 0
    for src, issues in results:
        for issue in issues:
            typer.echo(f"  {src}: {issue}")
        warnings += sum(1 for i in issues if i.severity == Severity.warning)
        failed += has_errors(issues)
    typer.echo(f"Checked {len(results)} document(s): {failed} with errors, {warnings} warning(s)")
    if failed or (strict and warnings):
        raise typer.Exit(1)


def fmt_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to normalize")],
    check: Annotated[bool, typer.Option("--check", help="Show diffs and exit 1 instead of rewriting")] = False,
    ):
    """Rewrite documents in normalized form (front matter + blank-line separated blocks)."""
    settings = _settings()
    try:
        results = run_format(path, settings, write=not check)
    except RuntimeError as e:
        _fail(str(e))

    for src, diff in results:
        if check:
            typer.echo("".join(diff), nl=False)
        else:
            typer.echo(f"  formatted: {src}")
    typer.echo(f"{len(results)} document(s) {'would change' if check else 'reformatted'}")
    if check and results:
        raise typer.Exit(1)


def export_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to export")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    ):
    """Write normalized MD + sidecar JSON to output dir."""
    settings = _settings(overrides={"output_dir": out})
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for src, md_path in results:
        typer.echo(f"  {src} -> {md_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")


def index_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to index")],
    prune: Annotated[bool, typer.Option("--prune", help="Remove indexed documents no longer under path")] = False,
    ):
    """Upsert documents and their taxonomy terms into the database."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        counts, changes = run_index(engine, path, settings, prune=prune)
    except RuntimeError as e:
        _fail("Index failed", e)

    for status, src in changes:
        typer.echo(f"  {status}: {src}")
    typer.echo(
        f"Index complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['removed']} removed"
    )


def tags_cmd(
    kind: Annotated[str, typer.Option("--kind", help="Taxonomy type to list")] = "tag",
    ):
    """List taxonomy terms with the number of indexed documents using each."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        counts = term_counts(session, kind)
    if not counts:
        typer.echo(f"No '{kind}' terms found in database.")
        raise typer.Exit(1)
    for term, n in counts:
        typer.echo(f"{term}\t{n}")


def find_cmd(
    term: Annotated[str, typer.Argument(help="Taxonomy term to look up")],
    kind: Annotated[str, typer.Option("--kind", help="Taxonomy type of the term")] = "tag",
    ):
    """List indexed documents carrying a taxonomy term."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        rows = [(r.slug, r.path, r.title) for r in find_by_term(session, kind, term)]
    if not rows:
        typer.echo(f"No documents with {kind} '{term}'.")
        raise typer.Exit(1)
    for slug, path, title in rows:
        typer.echo(f"{slug}\t{path}\t{title or ''}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
