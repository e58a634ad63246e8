"""Error taxonomy for store, persistence, and import failures."""

from typing import Optional


class MindVaultError(Exception):
    """Base class for all MindVault errors."""


class ImportFailure(MindVaultError):
    """Import was rejected; the store is left unchanged."""


class ParseError(ImportFailure):
    """Import payload is not valid JSON."""


class FormatError(ImportFailure):
    """Import payload is JSON but not a resource array.

    Attributes:
        index: Position of the offending element, or None when the
            top-level value itself is wrong.
    """

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class PersistenceError(MindVaultError):
    """Snapshot storage could not be read or written."""


class PersistenceReadError(PersistenceError):
    """Stored snapshot could not be read or is malformed."""


class PersistenceWriteError(PersistenceError):
    """Stored snapshot could not be written."""
