"""ManifestAggregator — merge per-folder manifests into one manifest.

Input layout::

    {root}/{folder}/{manifest_filename}     one file per bundle folder

Only the immediate subdirectories of ``root`` are visited; files directly
under ``root`` are ignored.  Folders are merged in filesystem enumeration
order unless ``sort_folders`` is set.

Merge rules:
  - Input categories are mapped onto the fixed ``Master`` / ``Others``
    categories of the result.  Any other name fails the run.
  - Assets are deduplicated by name.  The first asset seen for a name is kept
    for the whole run; later assets with that name are discarded even when
    their hash or size differ.
  - ``rawAssets`` of every folder are merged into one set with the same rule.
  - ``encryptedAssets`` is read but never merged.

Any load failure or category mismatch aborts the aggregation.  Nothing is
skipped and no partial result is returned.
"""

from collections.abc import Callable
from pathlib import Path

import structlog
from pydantic import BaseModel

from manifests.accumulator import make_accumulator
from manifests.loader import load_manifest
from models.errors import ManifestIOError
from models.manifest import Asset, Manifest, asset_key, merge_asset
from validation.category_validator import CategoryValidator

ProgressCallback = Callable[[int, int], None]
"""Called as ``progress(index, total)`` before each folder is loaded."""


class AggregationStats(BaseModel):
    """Counters for the most recent :meth:`ManifestAggregator.aggregate` call."""

    folders: int = 0
    assets_added: int = 0
    duplicates_discarded: int = 0


class ManifestAggregator:
    """Fold the manifests found under a root directory into one manifest.

    Usage::

        aggregator = ManifestAggregator()
        merged = aggregator.aggregate(root, "assetbundle.manifest.json")

    Args:
        loader: Callable that reads one manifest file.  Defaults to
            :func:`manifests.loader.load_manifest`.
        progress: Optional callback receiving ``(index, total)`` before each
            folder is processed.
        sort_folders: Visit folders in name order instead of filesystem
            order, which makes the surviving payload of duplicate names
            reproducible across machines.
    """

    def __init__(
        self,
        loader: Callable[[Path], Manifest] = load_manifest,
        progress: ProgressCallback | None = None,
        sort_folders: bool = False,
    ) -> None:
        self._loader = loader
        self._progress = progress
        self._sort_folders = sort_folders
        self._validator = CategoryValidator()
        self._log = structlog.get_logger("manifests.aggregator")
        self.last_stats = AggregationStats()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def aggregate(self, root_directory: Path | str, manifest_filename: str) -> Manifest:
        """Merge ``{folder}/{manifest_filename}`` of every folder under *root_directory*.

        Returns:
            A new :class:`~models.manifest.Manifest` with the ``Master`` and
            ``Others`` categories and the merged raw assets.

        Raises:
            ManifestIOError: *root_directory* cannot be listed, or a folder's
                manifest is missing or unreadable.
            ManifestParseError: A folder's manifest is malformed.
            SchemaMismatchError: A folder's manifest has an unknown category.
        """
        root = Path(root_directory)
        folders = self._list_folders(root)
        total = len(folders)

        result = make_accumulator()
        stats = AggregationStats()

        for index, folder in enumerate(folders):
            if self._progress is not None:
                self._progress(index, total)

            manifest_path = folder / manifest_filename
            manifest = self._loader(manifest_path)
            added, discarded = self._merge(result, manifest, manifest_path)

            stats.folders += 1
            stats.assets_added += added
            stats.duplicates_discarded += discarded
            self._log.debug(
                "manifest_folder_merged",
                index=index,
                total=total,
                path=str(manifest_path),
                added=added,
                discarded=discarded,
            )

        self.last_stats = stats
        self._log.info(
            "manifest_aggregated",
            root=str(root),
            manifest=manifest_filename,
            **stats.model_dump(),
        )
        return result

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _list_folders(self, root: Path) -> list[Path]:
        """Return the immediate subdirectories of *root*."""
        try:
            folders = [entry for entry in root.iterdir() if entry.is_dir()]
        except OSError as exc:
            raise ManifestIOError(
                root, f"cannot list manifest root ({exc.strerror or exc})"
            ) from exc

        if self._sort_folders:
            folders.sort(key=lambda p: p.name)
        return folders

    def _merge(self, result: Manifest, manifest: Manifest, source: Path) -> tuple[int, int]:
        """Merge *manifest* into *result* in place.

        Returns:
            ``(added, discarded)`` asset counts over all categories and raw
            assets.
        """
        added = discarded = 0

        for category in manifest.categories:
            target = self._validator.lookup(result, category.name, source)
            for asset in category.assets.values():
                if self._insert(target.assets, asset, source):
                    added += 1
                else:
                    discarded += 1
            # encrypted_assets is never merged.

        for asset in manifest.raw_assets.values():
            if self._insert(result.raw_assets, asset, source):
                added += 1
            else:
                discarded += 1

        return added, discarded

    def _insert(self, assets: dict[str, Asset], asset: Asset, source: Path) -> bool:
        """First-write-wins insert; logs duplicates whose payload differs."""
        if merge_asset(assets, asset):
            return True

        kept = assets[asset_key(asset)]
        if kept != asset:
            self._log.debug(
                "duplicate_asset_discarded",
                asset=asset.name,
                kept_hash=kept.hash,
                kept_size=kept.size,
                discarded_hash=asset.hash,
                discarded_size=asset.size,
                path=str(source),
            )
        return False
