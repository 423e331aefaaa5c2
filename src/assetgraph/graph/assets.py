"""Asset types and the vertex record stored for each asset."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .directed import Vertex


class AssetType(Enum):
    """Kind of game asset a vertex stands for."""
    AUDIO = "audio"
    MAP = "map"
    AAS = "aas"             # Bot navigation data paired with a map
    MODEL = "model"
    SCRIPT = "script"       # .shader script file
    SKIN = "skin"
    TEXTURE = "texture"     # Images and the shaders that name them
    MISC = "misc"


@dataclass(eq=False)
class AssetVertex(Vertex):
    """
    Vertex for one logical asset.

    Attributes:
        key: Canonical key (see keys.asset_key), unique per graph.
        names: Every raw reference string that resolved to key, first-seen order.
        type: Classification fixed when the vertex was created.
    """
    key: str = ""
    names: List[str] = field(default_factory=list)
    type: AssetType = AssetType.MISC

    @property
    def name(self) -> str:
        """First raw name this asset was referenced by."""
        return self.names[0] if self.names else self.key

    def __str__(self) -> str:
        return f"{self.type.value}:{self.key}"
