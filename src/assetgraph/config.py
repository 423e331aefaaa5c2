"""
GraphConfig - extension tables and naming conventions for AssetGraph.

Defaults describe a stock Quake III Arena install. A JSON file can override
any of them:

    {
      "image_extensions": [".jpg", ".tga", ".png"],
      "levelshot_dir": "levelshots",
      "type_conflict": "reject"
    }
"""

import json
import logging
from pathlib import Path
from typing import FrozenSet, Optional

logger = logging.getLogger(__name__)


TYPE_CONFLICT_WARN = "warn"
TYPE_CONFLICT_REJECT = "reject"
TYPE_CONFLICT_POLICIES = (TYPE_CONFLICT_WARN, TYPE_CONFLICT_REJECT)


class GraphConfig:
    """Configuration for asset ingestion."""

    AUDIO_EXTENSIONS = frozenset({".wav", ".ogg", ".mp3"})
    MAP_EXTENSIONS = frozenset({".bsp"})
    AAS_EXTENSIONS = frozenset({".aas"})
    MODEL_EXTENSIONS = frozenset({".md3"})
    SCRIPT_EXTENSIONS = frozenset({".shader"})
    SKIN_EXTENSIONS = frozenset({".skin"})
    IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".tga", ".png"})

    # Keys that hold extension sets, in the order they are saved
    EXTENSION_FIELDS = (
        "audio_extensions",
        "map_extensions",
        "aas_extensions",
        "model_extensions",
        "script_extensions",
        "skin_extensions",
        "image_extensions",
    )

    def __init__(self, config_file: Optional[str] = None):
        self.audio_extensions: FrozenSet[str] = self.AUDIO_EXTENSIONS
        self.map_extensions: FrozenSet[str] = self.MAP_EXTENSIONS
        self.aas_extensions: FrozenSet[str] = self.AAS_EXTENSIONS
        self.model_extensions: FrozenSet[str] = self.MODEL_EXTENSIONS
        self.script_extensions: FrozenSet[str] = self.SCRIPT_EXTENSIONS
        self.skin_extensions: FrozenSet[str] = self.SKIN_EXTENSIONS
        self.image_extensions: FrozenSet[str] = self.IMAGE_EXTENSIONS

        self.nav_extension = ".aas"
        self.levelshot_dir = "levelshots"
        self.levelshot_extension = ".tga"
        self.type_conflict = TYPE_CONFLICT_WARN

        if config_file and Path(config_file).exists():
            self.load(config_file)

    def to_dict(self) -> dict:
        data = {name: sorted(getattr(self, name)) for name in self.EXTENSION_FIELDS}
        data.update({
            "nav_extension": self.nav_extension,
            "levelshot_dir": self.levelshot_dir,
            "levelshot_extension": self.levelshot_extension,
            "type_conflict": self.type_conflict,
        })
        return data

    def update(self, data: dict):
        """Apply overrides from a dict, validating what it sets."""
        for name in self.EXTENSION_FIELDS:
            if name in data:
                setattr(self, name, frozenset(_normalize_extension(e) for e in data[name]))

        for name in ("nav_extension", "levelshot_extension"):
            if name in data:
                setattr(self, name, _normalize_extension(data[name]))

        if "levelshot_dir" in data:
            self.levelshot_dir = str(data["levelshot_dir"]).replace("\\", "/").strip("/").lower()

        if "type_conflict" in data:
            policy = str(data["type_conflict"]).lower()
            if policy not in TYPE_CONFLICT_POLICIES:
                raise ValueError(
                    f"Unknown type_conflict policy {data['type_conflict']!r}, "
                    f"expected one of {', '.join(TYPE_CONFLICT_POLICIES)}"
                )
            self.type_conflict = policy

    def save(self, config_file: str):
        """Save configuration to JSON."""
        with open(config_file, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def load(self, config_file: str):
        """Load configuration from JSON."""
        with open(config_file, 'r') as f:
            data = json.load(f)
        self.update(data)
        logger.debug(f"Loaded graph config from {config_file}")


def _normalize_extension(ext: str) -> str:
    ext = str(ext).strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext
