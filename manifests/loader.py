"""Load one asset-bundle manifest file.

The document is checked against ``contracts/schemas/AssetBundleManifest.v1.json``
before it is parsed into :class:`~models.manifest.Manifest`, so structural
problems are reported with the contract's wording and the offending path.
"""

import json
from pathlib import Path

import jsonschema
from pydantic import ValidationError

from app.utils.logging import get_logger
from models.errors import ManifestIOError, ManifestParseError
from models.manifest import Manifest

_CONTRACTS_DIR = Path(__file__).resolve().parent.parent / "contracts" / "schemas"
MANIFEST_SCHEMA: dict = json.loads(
    (_CONTRACTS_DIR / "AssetBundleManifest.v1.json").read_text(encoding="utf-8")
)

logger = get_logger("manifests.loader")


def load_manifest(path: Path | str) -> Manifest:
    """Read and parse the manifest at *path*.

    Raises:
        ManifestIOError: The file is missing or cannot be read.
        ManifestParseError: The file is not UTF-8 JSON, violates the manifest
            contract, or fails model validation.
    """
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestIOError(path, f"cannot read manifest ({exc.strerror or exc})") from exc
    except UnicodeDecodeError as exc:
        raise ManifestParseError(path, f"manifest is not UTF-8 ({exc.reason})") from exc

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, f"malformed JSON ({exc})") from exc

    try:
        jsonschema.validate(instance=document, schema=MANIFEST_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ManifestParseError(
            path,
            f"manifest does not conform to AssetBundleManifest.v1.json at {location}: {exc.message}",
        ) from exc

    try:
        manifest = Manifest.model_validate(document)
    except ValidationError as exc:
        raise ManifestParseError(path, f"invalid manifest ({exc.error_count()} errors): {exc}") from exc

    logger.debug(
        "manifest_loaded",
        path=str(path),
        categories=manifest.category_names(),
        assets=sum(len(c.assets) for c in manifest.categories),
        raw_assets=len(manifest.raw_assets),
    )
    return manifest
