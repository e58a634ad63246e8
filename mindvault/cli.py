"""[Layer: Presentation] Typer CLI Commands."""

from importlib.metadata import PackageNotFoundError, version as get_package_version
from pathlib import Path
from typing import Optional

import typer

from mindvault.config import get_settings
from mindvault.core.normalize import dedupe_tags
from mindvault.core.query import ALL, ResourceQuery, collect_tags, filter_resources
from mindvault.core.store import ResourceStore
from mindvault.core.transfer import import_file, write_backup
from mindvault.database.snapshot import SqliteSnapshotStorage
from mindvault.errors import ImportFailure
from mindvault.models import RESOURCE_TYPES, Resource
from mindvault.utils.llm import analyze_content, get_example_config, save_config
from mindvault.utils.llm.constants import DEFAULT_BASE_URL

_TYPE_ICONS = {"ARTICLE": "📄", "VIDEO": "🎬", "AUDIO": "🎧", "TWEET": "💬"}


def _get_version() -> str:
    """Get version from package metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("mindvault")
    except PackageNotFoundError:
        return "0.0.0-dev"


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mindvault {_get_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="mindvault",
    help="Local-first knowledge bookmarks with AI summaries and tags.",
)


def _open_store() -> ResourceStore:
    """Load the store from the configured snapshot database."""
    settings = get_settings()
    return ResourceStore.open(SqliteSnapshotStorage(settings.db_path))


def _parse_type(value: str, allow_all: bool = False) -> str:
    """Validate a resource type option (case-insensitive)."""
    normalized = value.strip().upper()
    if allow_all and normalized == ALL:
        return ALL
    if normalized not in RESOURCE_TYPES:
        choices = ", ".join(RESOURCE_TYPES + ((ALL,) if allow_all else ()))
        raise typer.BadParameter(f"must be one of: {choices}")
    return normalized


def _split_tags(raw: Optional[str]) -> list[str]:
    return dedupe_tags(raw.split(",")) if raw else []


def _format_line(resource: Resource) -> str:
    icon = _TYPE_ICONS.get(resource.type, "📎")
    tags_str = f" [{', '.join(resource.tags)}]" if resource.tags else ""
    return f"  {icon} {resource.title} ({resource.platform}){tags_str}  {resource.id}"


def _print_resources(resources: list[Resource], total: int) -> None:
    if not resources:
        typer.echo("No matching resources. Use 'mindvault add <title>' to save one.")
        return
    typer.echo(f"\nResources ({len(resources)} of {total}):\n")
    for r in resources:
        typer.echo(_format_line(r))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """List saved resources when no command is provided."""
    if ctx.invoked_subcommand is None:
        store = _open_store()
        items = store.list()
        _print_resources(filter_resources(items, ResourceQuery()), len(items))


@app.command()
def add(
    title: str = typer.Argument(..., help="Title of the resource"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Source link"),
    type_: str = typer.Option(
        "ARTICLE", "--type", "-T", help="ARTICLE, VIDEO, AUDIO or TWEET"
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", "-P", help="Origin label, e.g. publisher name"
    ),
    content: Optional[str] = typer.Option(
        None, "--content", "-c", help="Raw text to summarize"
    ),
    summary: Optional[str] = typer.Option(
        None, "--summary", "-s", help="Own summary (skips AI analysis)"
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Personal notes"),
    tags_opt: Optional[str] = typer.Option(
        None, "--tags", "-t", help="Comma-separated tags"
    ),
    no_ai: bool = typer.Option(False, "--no-ai", help="Skip AI summary and tags"),
) -> None:
    """Save a new resource, optionally summarized and tagged by AI.

    Examples:
        mindvault add "RSC deep dive" --url https://react.dev --content "..."
        mindvault add "Podcast #42" --type audio --platform Spotify --no-ai
        mindvault add "Thread on agents" -T tweet --tags "ai,agents"
    """
    resource_type = _parse_type(type_)
    user_tags = _split_tags(tags_opt)
    final_summary = summary or ""
    final_tags = user_tags

    if not summary and not no_ai and get_settings().enable_ai:
        typer.echo("Analyzing...")
        analysis = analyze_content(title, content or "", resource_type)
        if analysis.is_fallback:
            typer.echo(f"AI summary unavailable ({analysis.reason}); using fallback.")
        final_summary = analysis.summary
        final_tags = dedupe_tags(user_tags + analysis.suggested_tags)

    store = _open_store()
    resource = store.add(
        title=title,
        url=url,
        type=resource_type,
        platform=platform,
        content_raw=content,
        summary=final_summary,
        user_notes=notes,
        tags=final_tags,
    )
    typer.echo(f"Saved: {resource.title} ({resource.id})")
    if resource.summary:
        typer.echo(f"Summary: {resource.summary}")
    if resource.tags:
        typer.echo(f"Tags: {', '.join(resource.tags)}")


@app.command(name="list")
def list_cmd(
    type_: str = typer.Option(ALL, "--type", "-T", help="Filter by type (or ALL)"),
    search: str = typer.Option("", "--search", "-q", help="Case-insensitive text search"),
    tag: str = typer.Option(ALL, "--tag", "-t", help="Filter by exact tag (or ALL)"),
    oldest_first: bool = typer.Option(
        False, "--oldest-first", help="Sort by creation time ascending"
    ),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum results"),
) -> None:
    """List saved resources, filtered and sorted."""
    query = ResourceQuery(
        type=_parse_type(type_, allow_all=True),
        search=search,
        tag=tag,
        sort="createdAt_asc" if oldest_first else "createdAt_desc",
    )
    store = _open_store()
    items = store.list()
    _print_resources(filter_resources(items, query)[:limit], len(items))


@app.command()
def show(resource_id: str = typer.Argument(..., help="Resource ID")) -> None:
    """Show every field of a resource."""
    resource = _open_store().get(resource_id)
    if resource is None:
        typer.echo(f"No resource with id {resource_id}", err=True)
        raise typer.Exit(1)
    typer.echo(f"{_TYPE_ICONS.get(resource.type, '📎')} {resource.title}")
    typer.echo(f"  ID:       {resource.id}")
    typer.echo(f"  Type:     {resource.type}")
    typer.echo(f"  URL:      {resource.url}")
    typer.echo(f"  Platform: {resource.platform}")
    typer.echo(f"  Tags:     {', '.join(resource.tags) or '-'}")
    typer.echo(f"  Summary:  {resource.summary or '-'}")
    typer.echo(f"  Notes:    {resource.user_notes or '-'}")


@app.command(name="tags")
def list_tags() -> None:
    """List all tags in use, in first-seen order."""
    all_tags = collect_tags(_open_store().list())
    if not all_tags:
        typer.echo("No tags yet.")
        return
    typer.echo(f"\nTags ({len(all_tags)}):\n")
    for t in all_tags:
        typer.echo(f"  {t}")


@app.command()
def notes(
    resource_id: str = typer.Argument(..., help="Resource ID"),
    text: str = typer.Argument(..., help="New notes (replaces existing notes)"),
) -> None:
    """Replace the personal notes on a resource."""
    updated = _open_store().update_notes(resource_id, text)
    if updated is None:
        typer.echo(f"No resource with id {resource_id}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Notes updated: {updated.title}")


@app.command()
def delete(
    resource_id: str = typer.Argument(..., help="Resource ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a resource."""
    if not yes:
        typer.confirm("Are you sure you want to delete this resource?", abort=True)
    if _open_store().delete(resource_id):
        typer.echo(f"Deleted: {resource_id}")
    else:
        typer.echo(f"No resource with id {resource_id}")


@app.command()
def export(
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory for the backup file"
    ),
) -> None:
    """Export all resources to a dated JSON backup file."""
    directory = output_dir or get_settings().export_dir
    path = write_backup(_open_store().list(), directory)
    if path is None:
        typer.echo("Nothing to export.")
        return
    typer.echo(f"Exported to {path}")


@app.command(name="import")
def import_cmd(
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Backup JSON file"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Replace ALL saved resources with the contents of a backup file."""
    store = _open_store()
    if not yes:
        typer.confirm(
            f"Importing replaces all {len(store)} current resources. Continue?",
            abort=True,
        )
    try:
        imported = import_file(store, path)
    except ImportFailure as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    typer.echo(f"Import succeeded: {len(imported)} resources replaced the current list.")


@app.command()
def analyze(
    title: str = typer.Argument(..., help="Title of the content"),
    content: str = typer.Option("", "--content", "-c", help="Raw text to summarize"),
    type_: str = typer.Option("ARTICLE", "--type", "-T", help="Resource type"),
) -> None:
    """Preview the AI summary and tags without saving anything."""
    analysis = analyze_content(title, content, _parse_type(type_))
    if analysis.is_fallback:
        typer.echo(f"(fallback: {analysis.reason})")
    typer.echo(f"Summary: {analysis.summary}")
    typer.echo(f"Tags: {', '.join(analysis.suggested_tags)}")


@app.command()
def config(
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="DeepSeek API key to store"
    ),
    base_url: str = typer.Option(DEFAULT_BASE_URL, "--base-url", help="API base URL"),
) -> None:
    """Write the summarization config file, or print an example."""
    if api_key is None:
        typer.echo(get_example_config())
        return
    path = save_config(api_key, base_url=base_url)
    typer.echo(f"Saved configuration to {path}")


@app.command()
def version() -> None:
    """Show MindVault version."""
    typer.echo(f"mindvault {_get_version()}")
