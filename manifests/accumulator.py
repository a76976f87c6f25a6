"""Factory for the empty manifest that folder manifests are merged into."""

from models.manifest import AssetCategory, CategoryName, Manifest, UnityHeader

# Fixed metadata of every merged manifest.  Not derived from the inputs.
_GAME_OBJECT_PATH_ID = 0
_SCRIPT_PATH_ID = 3126599977334250442
_MANIFEST_NAME = "manifest"


def make_accumulator() -> Manifest:
    """Return a fresh merge target.

    The result has the ``Master`` and ``Others`` categories, in that order,
    with empty asset sets, and an empty raw-asset set.
    """
    return Manifest(
        game_object=UnityHeader(path_id=_GAME_OBJECT_PATH_ID, file_id=0),
        enabled=1,
        script=UnityHeader(path_id=_SCRIPT_PATH_ID, file_id=0),
        name=_MANIFEST_NAME,
        categories=[AssetCategory(name=c.value, assets={}) for c in CategoryName],
        raw_assets={},
    )
