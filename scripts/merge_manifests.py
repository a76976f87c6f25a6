#!/usr/bin/env python3
"""Merge the per-folder asset-bundle manifests into one manifest per type.

Usage:
    python scripts/merge_manifests.py [--root PATH] [--output-dir PATH]
                                      [--type NAME ...] [--sorted]

For every manifest type (all five by default), each immediate subfolder of
the root must contain a file with that name.  The merged result is written to
``{output_dir}/{manifest type}``.

Root resolution: --root, then $MANIFEST_ROOT, then the built-in default.
Output directory: --output-dir, then $MANIFEST_OUTPUT_DIR, then the CWD.

Exit codes:
    0  — all requested manifest types merged and written
    1  — a manifest could not be read, parsed, merged or written
    2  — bad arguments / root directory not found
"""

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path so manifests/* and models/* are importable
# when the script is invoked from any working directory.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import resolve_manifest_root, resolve_output_dir  # noqa: E402
from app.models.manifest_types import ALL_MANIFEST_TYPES, ManifestType  # noqa: E402
from app.utils.logging import configure_logging  # noqa: E402
from manifests.aggregator import ManifestAggregator  # noqa: E402
from manifests.writer import write_manifest  # noqa: E402
from models.errors import ManifestError  # noqa: E402


def _print_progress(index: int, total: int) -> None:
    print(f"{index} / {total}", flush=True)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--root", "-r",
        metavar="PATH",
        help="Directory whose subfolders each contain the manifest files.",
    )
    parser.add_argument(
        "--output-dir", "-o",
        metavar="PATH",
        help="Directory to write the merged manifests to (default: CWD).",
    )
    parser.add_argument(
        "--type", "-t",
        dest="types",
        action="append",
        choices=[t.value for t in ManifestType],
        metavar="NAME",
        help="Manifest type to merge; repeatable.  Default: all five types.",
    )
    parser.add_argument(
        "--sorted",
        action="store_true",
        help="Visit folders in name order instead of filesystem order.",
    )
    args = parser.parse_args()

    configure_logging()

    root = resolve_manifest_root(args.root)
    output_dir = resolve_output_dir(args.output_dir)

    # 1. Validate root
    if not root.is_dir():
        print(f"ERROR: manifest root not found: {root}", file=sys.stderr)
        sys.exit(2)

    manifest_types = (
        [ManifestType(t) for t in args.types] if args.types else list(ALL_MANIFEST_TYPES)
    )
    aggregator = ManifestAggregator(progress=_print_progress, sort_folders=args.sorted)

    print("Starting")
    for manifest_type in manifest_types:
        print(f"Processing manifests of type {manifest_type.value}")

        # 2. Aggregate, 3. Write; the first failure ends the run
        try:
            merged = aggregator.aggregate(root, manifest_type.value)
            written = write_manifest(merged, output_dir / manifest_type.value)
        except ManifestError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            sys.exit(1)

        # 4. Summary
        stats = aggregator.last_stats
        print(
            f"OK: {stats.folders} folders; {stats.assets_added} assets; "
            f"{stats.duplicates_discarded} duplicates discarded → {written}"
        )


if __name__ == "__main__":
    main()
