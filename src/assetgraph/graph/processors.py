"""
Per-type processors - turn parsed records into vertices and references.

Each processor registers one primary asset and references everything the
record names. Records come from the readers in assetgraph.formats or any
object with the same shape; fields are read with _field so a dict works as
well as an attribute object, and a missing field reads as empty.

Shader direction:

                            / - scripts/base_wall.shader
  textures/base_wall/foo -> -- textures/base_wall/foo_stage1.tga
                            \\ - textures/base_wall/foo_stage2.tga

Scripts are never referenced by name, so the shader references its script
rather than the other way round. An edge here means "is referenced by",
not "is required to produce".
"""

import logging
import posixpath
from collections.abc import Mapping
from typing import Any, Iterable

from .assets import AssetType, AssetVertex
from .keys import replace_extension

logger = logging.getLogger(__name__)

# Entity keys holding asset paths
ENTITY_AUDIO_FIELDS = ("music", "noise")
ENTITY_MODEL_FIELDS = ("model", "model2")


def _field(record: Any, name: str, default=None):
    """Read name from a mapping or an attribute object."""
    if record is None:
        return default
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _items(record: Any, name: str) -> Iterable:
    value = _field(record, name)
    return value or ()


def _stages(shader: Any) -> Iterable:
    # A bare list of stages is accepted as a shader
    if isinstance(shader, (list, tuple)):
        return shader
    return _items(shader, "stages")


def process_script(graph, name: str, script: Any) -> AssetVertex:
    """Register a shader script and every shader it defines."""
    script_asset = graph.register_asset(name, AssetType.SCRIPT)

    shaders = script.items() if isinstance(script, Mapping) else ()
    for shader_name, shader in shaders:
        if not shader_name:
            continue

        # shaders are textures that reference other textures
        shader_asset = graph.register_asset(shader_name, AssetType.TEXTURE)
        graph.add_reference(shader_asset, script_asset)

        for stage in _stages(shader):
            for texture in _items(stage, "maps"):
                if not texture:
                    continue
                stage_asset = graph.register_asset(texture, AssetType.TEXTURE)
                graph.add_reference(shader_asset, stage_asset)

    return script_asset


def process_skin(graph, name: str) -> AssetVertex:
    """Register a skin file."""
    # TODO: parse .skin surface,shader lines into texture references
    return graph.register_asset(name, AssetType.SKIN)


def process_model(graph, name: str, model: Any) -> AssetVertex:
    """Register a model with its skins and surface shaders."""
    model_asset = graph.register_asset(name, AssetType.MODEL)

    for skin in _items(model, "skins"):
        if not skin:
            # models often carry empty skin / shader names
            continue
        graph.add_reference(model_asset, process_skin(graph, skin))

    for surface in _items(model, "surfaces"):
        for texture in _items(surface, "shaders"):
            if not texture:
                continue
            texture_asset = graph.register_asset(texture, AssetType.TEXTURE)
            graph.add_reference(model_asset, texture_asset)

    return model_asset


def nav_key(map_key: str, nav_extension: str = ".aas") -> str:
    """Navigation file paired with a map: maps/q3dm1.bsp -> maps/q3dm1.aas."""
    return replace_extension(map_key, nav_extension)


def levelshot_name(map_key: str, levelshot_dir: str = "levelshots",
                   levelshot_extension: str = ".tga") -> str:
    """Preview image for a map: maps/q3dm1.bsp -> levelshots/q3dm1.tga."""
    stem = posixpath.splitext(posixpath.basename(map_key))[0]
    return posixpath.join(levelshot_dir, stem + levelshot_extension)


def _entity_path(map_name: str, entity: Any, key: str):
    value = _field(entity, key)
    if value and not isinstance(value, str):
        logger.debug(f"{map_name}: skipping non-string entity {key} {value!r}")
        return None
    return value


def process_map(graph, name: str, bsp: Any) -> AssetVertex:
    """Register a map, its implicit companions and everything its lumps name."""
    config = graph.config
    map_asset = graph.register_asset(name, AssetType.MAP)

    # bot navigation file is never referenced, it is paired by name
    aas = graph.register_asset(nav_key(map_asset.key, config.nav_extension), AssetType.AAS)
    graph.add_reference(map_asset, aas)

    levelshot = levelshot_name(map_asset.key, config.levelshot_dir, config.levelshot_extension)
    graph.add_reference(map_asset, graph.register_asset(levelshot, AssetType.TEXTURE))

    for entity in _items(bsp, "entities"):
        assets = []
        for key in ENTITY_AUDIO_FIELDS:
            value = _entity_path(name, entity, key)
            if value:
                assets.append(graph.register_asset(value, AssetType.AUDIO))
        for key in ENTITY_MODEL_FIELDS:
            value = _entity_path(name, entity, key)
            if not value or value.startswith("*"):
                # "*N" is an inline brush model, stored in the map itself
                continue
            assets.append(graph.register_asset(value, AssetType.MODEL))
        for asset in assets:
            graph.add_reference(map_asset, asset)

    for shader in _items(bsp, "shaders"):
        texture = _field(shader, "shader_name") or _field(shader, "shaderName")
        if not texture:
            logger.debug(f"{name}: skipping unnamed shader lump entry")
            continue
        graph.add_reference(map_asset, graph.register_asset(texture, AssetType.TEXTURE))

    return map_asset
