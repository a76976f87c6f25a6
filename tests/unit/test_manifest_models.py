"""Unit tests for the manifest models.

Covers:
  1. External (Unity) field names and snake_case names are both accepted.
  2. Asset sets are keyed by name; duplicates inside one array keep the first.
  3. Optional fields (metadata, encryptedAssets) may be omitted.
  4. Serialisation uses the external field names.
"""

import pytest
from pydantic import ValidationError

from models.manifest import (
    Asset,
    AssetCategory,
    CategoryName,
    Manifest,
    asset_key,
    merge_asset,
)


_EXTERNAL_DOC: dict = {
    "m_GameObject": {"m_FileID": 0, "m_PathID": 7},
    "m_Enabled": 1,
    "m_Script": {"m_FileID": 2, "m_PathID": 3126599977334250442},
    "m_Name": "manifest",
    "categories": [
        {
            "name": "Master",
            "assets": [{"name": "master/a", "hash": "h1", "size": 10}],
            "encryptedAssets": [{"name": "master/enc", "hash": "e1", "size": 5}],
        },
        {"name": "Others", "assets": [], "encryptedAssets": []},
    ],
    "rawAssets": [{"name": "raw/r", "hash": "r1", "size": 3}],
}


# ---------------------------------------------------------------------------
# Field names
# ---------------------------------------------------------------------------


def test_parses_external_field_names() -> None:
    manifest = Manifest.model_validate(_EXTERNAL_DOC)

    assert manifest.game_object.path_id == 7
    assert manifest.script.path_id == 3126599977334250442
    assert manifest.script.file_id == 2
    assert manifest.enabled == 1
    assert manifest.name == "manifest"
    assert manifest.category_names() == ["Master", "Others"]
    assert manifest.raw_assets == {"raw/r": Asset(name="raw/r", hash="r1", size=3)}


def test_parses_internal_field_names() -> None:
    """snake_case spellings are accepted as well as the external ones."""
    manifest = Manifest.model_validate(
        {
            "game_object": {"path_id": 1, "file_id": 0},
            "name": "bundle",
            "categories": [
                {"name": "Others", "assets": [], "encrypted_assets": []},
            ],
            "raw_assets": [],
        }
    )

    assert manifest.game_object.path_id == 1
    assert manifest.name == "bundle"
    assert manifest.categories[0].encrypted_assets == {}


def test_encrypted_assets_are_parsed_but_optional() -> None:
    manifest = Manifest.model_validate(_EXTERNAL_DOC)
    assert list(manifest.categories[0].encrypted_assets) == ["master/enc"]

    category = AssetCategory.model_validate({"name": "Master", "assets": []})
    assert category.encrypted_assets == {}


def test_metadata_fields_may_be_omitted() -> None:
    manifest = Manifest.model_validate({"categories": [], "rawAssets": []})

    assert manifest.game_object.path_id == 0
    assert manifest.enabled == 1
    assert manifest.name == ""


def test_missing_raw_assets_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate({"categories": []})


def test_asset_requires_hash_and_size() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate(
            {"categories": [], "rawAssets": [{"name": "x", "hash": "h"}]}
        )


def test_asset_entry_without_name_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Manifest.model_validate(
            {"categories": [], "rawAssets": [{"hash": "h", "size": 1}]}
        )


# ---------------------------------------------------------------------------
# Name identity
# ---------------------------------------------------------------------------


def test_duplicate_names_in_one_array_keep_first() -> None:
    manifest = Manifest.model_validate(
        {
            "categories": [],
            "rawAssets": [
                {"name": "x", "hash": "first", "size": 1},
                {"name": "x", "hash": "second", "size": 2},
            ],
        }
    )

    assert len(manifest.raw_assets) == 1
    assert manifest.raw_assets["x"].hash == "first"
    assert manifest.raw_assets["x"].size == 1


def test_asset_key_is_the_name() -> None:
    assert asset_key(Asset(name="a/b", hash="h", size=1)) == "a/b"


def test_merge_asset_first_write_wins() -> None:
    assets: dict[str, Asset] = {}

    assert merge_asset(assets, Asset(name="x", hash="h1", size=10)) is True
    assert merge_asset(assets, Asset(name="x", hash="h2", size=20)) is False

    assert assets == {"x": Asset(name="x", hash="h1", size=10)}


def test_category_name_order() -> None:
    assert [c.value for c in CategoryName] == ["Master", "Others"]


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def test_to_document_uses_external_names() -> None:
    doc = Manifest.model_validate(_EXTERNAL_DOC).to_document()

    assert set(doc) == {"m_GameObject", "m_Enabled", "m_Script", "m_Name", "categories", "rawAssets"}
    assert doc["m_Script"] == {"m_PathID": 3126599977334250442, "m_FileID": 2}
    assert doc["rawAssets"] == [{"name": "raw/r", "hash": "r1", "size": 3}]
    assert doc["categories"][0]["assets"] == [{"name": "master/a", "hash": "h1", "size": 10}]
    assert "encryptedAssets" in doc["categories"][0]


def test_to_document_reparses_to_same_manifest() -> None:
    manifest = Manifest.model_validate(_EXTERNAL_DOC)
    assert Manifest.model_validate(manifest.to_document()) == manifest
