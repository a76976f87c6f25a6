"""Serialise a merged manifest to disk.

The output uses the external field names, so a written file is itself a valid
input for :func:`manifests.loader.load_manifest`.
"""

import json
import os
import tempfile
from pathlib import Path

import jsonschema

from app.utils.logging import get_logger
from manifests.loader import MANIFEST_SCHEMA
from models.errors import ManifestIOError, ManifestParseError
from models.manifest import Manifest

logger = get_logger("manifests.writer")


def write_manifest(manifest: Manifest, path: Path | str) -> Path:
    """Write *manifest* to *path*, replacing any existing file atomically.

    The document is written to a temporary file next to *path* and renamed
    over it, so *path* either holds the complete new manifest or is untouched.

    Returns:
        The path written.

    Raises:
        ManifestParseError: The serialised document violates the manifest
            contract.
        ManifestIOError: The file could not be written.
    """
    path = Path(path)
    document = manifest.to_document()

    try:
        jsonschema.validate(instance=document, schema=MANIFEST_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise ManifestParseError(
            path,
            f"output does not conform to AssetBundleManifest.v1.json: {exc.message}",
        ) from exc

    text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestIOError(path, f"cannot write manifest ({exc.strerror or exc})") from exc

    logger.info(
        "manifest_written",
        path=str(path),
        bytes=len(text.encode("utf-8")),
        raw_assets=len(manifest.raw_assets),
    )
    return path
