"""Errors raised while loading, merging and writing manifests.

Every error carries the path of the offending file or directory.  None of them
is recovered locally: the aggregation for the current manifest type stops and
no output is written for it.
"""

from pathlib import Path


class ManifestError(Exception):
    """Base class for all manifest pipeline failures."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{message}: {self.path}")


class ManifestIOError(ManifestError):
    """A manifest file or directory is missing, unreadable or unwritable."""


class ManifestParseError(ManifestError):
    """A manifest is not valid JSON or does not match the manifest schema."""


class SchemaMismatchError(ManifestError):
    """A manifest contains a category outside the predefined set."""

    def __init__(self, path: Path | str, category: str, allowed: list[str]) -> None:
        self.category = category
        self.allowed = allowed
        super().__init__(
            path,
            f"unknown category {category!r} (expected one of {allowed})",
        )
