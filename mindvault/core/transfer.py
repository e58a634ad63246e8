"""Backup export and import of the full resource list.

Import is a destructive full replace, not a merge: the imported resources
become the store's entire content.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional

from mindvault.database.snapshot import dump_resources
from mindvault.errors import FormatError, ParseError
from mindvault.models import Resource
from mindvault.models.resource import new_resource_id

from .normalize import normalize_resource
from .store import ResourceStore

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "mindvault-backup"


def backup_filename(day: Optional[date] = None) -> str:
    """Return the export filename for ``day`` (default: today)."""
    day = day or date.today()
    return f"{BACKUP_PREFIX}-{day.isoformat()}.json"


def export_snapshot(resources: list[Resource]) -> Optional[str]:
    """Serialize resources as pretty-printed JSON, or None if there are none."""
    if not resources:
        return None
    return dump_resources(resources, indent=2)


def write_backup(
    resources: list[Resource],
    directory: Path,
    today: Optional[date] = None,
) -> Optional[Path]:
    """Write a dated backup file into ``directory``.

    Returns:
        Path of the written file, or None when there is nothing to export.
    """
    content = export_snapshot(resources)
    if content is None:
        logger.info("Nothing to export")
        return None
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / backup_filename(today)
    path.write_text(content, encoding="utf-8")
    logger.info("Exported %d resources to %s", len(resources), path)
    return path


def normalize_snapshot(payload: Any) -> list[Resource]:
    """Normalize a parsed snapshot into resources.

    Existing ids and creation times are preserved when well-typed so a
    re-imported backup keeps its identities. A repeated id is replaced with
    a fresh one to keep ids unique.

    Raises:
        FormatError: If ``payload`` is not a list of objects.
    """
    if not isinstance(payload, list):
        raise FormatError(
            "Import failed: expected a JSON array of resources, "
            f"got {type(payload).__name__}"
        )

    resources: list[Resource] = []
    seen: set[str] = set()
    for i, item in enumerate(payload):
        resource = normalize_resource(item, preserve_identity=True, index=i)
        if resource.id in seen:
            logger.warning("Duplicate id %s at index %d; assigning a new id", resource.id, i)
            resource = resource.model_copy(update={"id": new_resource_id()})
        seen.add(resource.id)
        resources.append(resource)
    return resources


def parse_snapshot(text: str) -> list[Resource]:
    """Parse backup text into normalized resources.

    Raises:
        ParseError: If ``text`` is not valid JSON.
        FormatError: If the JSON is not a list of objects.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Import failed: could not parse JSON ({e})") from e
    return normalize_snapshot(payload)


def import_snapshot(store: ResourceStore, text: str) -> list[Resource]:
    """Replace the store's content with the resources in ``text``.

    The store is left unchanged if parsing or normalization fails.

    Returns:
        The imported resources.
    """
    resources = parse_snapshot(text)
    store.replace_all(resources)
    return resources


def import_file(store: ResourceStore, path: Path) -> list[Resource]:
    """Read a backup file and replace the store's content with it."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"Import failed: file is not UTF-8 text ({e})") from e
    return import_snapshot(store, text)
