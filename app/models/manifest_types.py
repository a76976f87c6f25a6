"""The fixed set of manifest types merged by the driver.

Each manifest type is the filename every bundle folder uses for one locale
variant; the merged result is written under the same filename.
"""

from enum import Enum


class ManifestType(str, Enum):
    DEFAULT = "assetbundle.manifest.json"
    EN_US   = "assetbundle.en_us.manifest.json"
    EN_EU   = "assetbundle.en_eu.manifest.json"
    ZH_TW   = "assetbundle.zh_tw.manifest.json"
    ZH_CN   = "assetbundle.zh_cn.manifest.json"


# Processing order used when no explicit subset is requested.
ALL_MANIFEST_TYPES: tuple[ManifestType, ...] = tuple(ManifestType)
