"""Application logic layer."""

from .normalize import ResourceDraft, dedupe_tags, normalize_resource
from .query import ResourceQuery, collect_tags, filter_resources, matches
from .store import ResourceStore
from .transfer import (
    backup_filename,
    export_snapshot,
    import_file,
    import_snapshot,
    normalize_snapshot,
    parse_snapshot,
    write_backup,
)

__all__ = [
    "ResourceDraft",
    "ResourceQuery",
    "ResourceStore",
    "backup_filename",
    "collect_tags",
    "dedupe_tags",
    "export_snapshot",
    "filter_resources",
    "import_file",
    "import_snapshot",
    "matches",
    "normalize_resource",
    "normalize_snapshot",
    "parse_snapshot",
    "write_backup",
]
