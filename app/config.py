"""Path configuration for the manifest merger.

Root resolution (same priority chain for both paths):
  1. Explicit argument (``--root`` / ``--output-dir``)
  2. Env var (``MANIFEST_ROOT`` / ``MANIFEST_OUTPUT_DIR``)
  3. Built-in default
"""

import os
from pathlib import Path

# Default manifest tree, relative to the working directory: one folder per
# bundle, each holding the five manifest type files.
DEFAULT_MANIFEST_ROOT = Path("DragaliaManifests-master") / "Android"


def resolve_manifest_root(root: str | None = None) -> Path:
    """Return the directory whose immediate subfolders hold the input manifests."""
    value = root or os.environ.get("MANIFEST_ROOT") or str(DEFAULT_MANIFEST_ROOT)
    return Path(value).expanduser()


def resolve_output_dir(output_dir: str | None = None) -> Path:
    """Return the directory merged manifests are written to (default: CWD)."""
    value = output_dir or os.environ.get("MANIFEST_OUTPUT_DIR")
    return Path(value).expanduser() if value else Path.cwd()
