"""Pydantic models for asset-bundle manifests.

One manifest lists the assets of a content bundle, grouped into categories,
plus a flat set of raw assets::

    {
      "m_GameObject": {"m_FileID": 0, "m_PathID": 0},
      "m_Enabled": 1,
      "m_Script": {"m_FileID": 0, "m_PathID": 3126599977334250442},
      "m_Name": "manifest",
      "categories": [
        {"name": "Master", "assets": [{"name": ..., "hash": ..., "size": ...}],
         "encryptedAssets": []},
        {"name": "Others", "assets": [...], "encryptedAssets": []}
      ],
      "rawAssets": [...]
    }

Field names on disk follow the external (Unity) convention; the models expose
snake_case attributes and accept either spelling on input.

Asset sets are keyed by :func:`asset_key` (the asset name).  Hash and size are
payload only: two assets with the same name are the same asset.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer


class CategoryName(str, Enum):
    """The closed set of category names a manifest may contain, in output order."""

    MASTER = "Master"
    OTHERS = "Others"


class Asset(BaseModel):
    """A named content unit.  Identity is ``name`` (see :func:`asset_key`)."""

    model_config = ConfigDict(frozen=True)

    name: str
    hash: str
    size: int


def asset_key(asset: Asset) -> str:
    """Return the identity of *asset* within an asset set."""
    return asset.name


def merge_asset(assets: dict[str, Asset], asset: Asset) -> bool:
    """Insert *asset* into *assets* unless an asset with the same key is present.

    First write wins: an existing entry is never replaced, whatever its hash
    or size.

    Returns:
        ``True`` if *asset* was inserted, ``False`` if it was discarded.
    """
    key = asset_key(asset)
    if key in assets:
        return False
    assets[key] = asset
    return True


def _index_by_name(value: object) -> object:
    """Turn a JSON array of assets into a name-keyed mapping (first occurrence kept)."""
    if isinstance(value, Mapping):
        return value
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected an array of assets")

    indexed: dict[str, object] = {}
    for item in value:
        if isinstance(item, Asset):
            key = asset_key(item)
        elif isinstance(item, Mapping) and isinstance(item.get("name"), str):
            key = item["name"]
        else:
            raise ValueError(f"asset entry must be an object with a string name: {item!r}")
        indexed.setdefault(key, item)
    return indexed


AssetSet = Annotated[
    dict[str, Asset],
    BeforeValidator(_index_by_name),
    PlainSerializer(lambda assets: list(assets.values()), return_type=list[Asset]),
]
"""Name-keyed, insertion-ordered set of assets; serialised as a JSON array."""


class AssetCategory(BaseModel):
    """A named bucket of assets."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    """Category name as read from the file.  Checked against
    :class:`CategoryName` only when the manifest is merged."""

    assets: AssetSet

    encrypted_assets: AssetSet = Field(default_factory=dict, alias="encryptedAssets")
    """Parsed for input compatibility but never merged.  Left empty on the
    aggregated manifest."""


class UnityHeader(BaseModel):
    """Object reference header carried by the manifest metadata fields."""

    model_config = ConfigDict(populate_by_name=True)

    path_id: int = Field(0, alias="m_PathID")
    file_id: int = Field(0, alias="m_FileID")


class Manifest(BaseModel):
    """A complete asset-bundle manifest."""

    model_config = ConfigDict(populate_by_name=True)

    game_object: UnityHeader = Field(default_factory=UnityHeader, alias="m_GameObject")
    enabled: int = Field(1, alias="m_Enabled")
    script: UnityHeader = Field(default_factory=UnityHeader, alias="m_Script")
    name: str = Field("", alias="m_Name")

    categories: list[AssetCategory]
    raw_assets: AssetSet = Field(alias="rawAssets")

    def find_category(self, name: str) -> AssetCategory | None:
        """Return the category called *name*, or ``None``."""
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def category_names(self) -> list[str]:
        return [category.name for category in self.categories]

    def to_document(self) -> dict:
        """Return the JSON-ready document using the external field names."""
        return self.model_dump(mode="json", by_alias=True)
