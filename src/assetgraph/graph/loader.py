"""Ingestion - route files to the right reader and processor by extension."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from ..formats.bsp import BSPReader
from ..formats.md3 import MD3Reader
from ..formats.shader import ShaderScriptReader
from ..utils.binary import TEXT_ENCODING
from .assets import AssetType, AssetVertex
from .keys import sanitize, split_extension
from .processors import process_map, process_model, process_script, process_skin

logger = logging.getLogger(__name__)

Content = Union[bytes, bytearray, str, None]


def _as_bytes(content: Content) -> bytes:
    if content is None:
        raise ValueError("No content given for a structured asset")
    if isinstance(content, str):
        return content.encode(TEXT_ENCODING)
    return bytes(content)


def _as_text(content: Content) -> str:
    if isinstance(content, str):
        return content
    return _as_bytes(content).decode(TEXT_ENCODING)


def load_map(content: Content):
    return BSPReader().read_bytes(_as_bytes(content))


def load_model(content: Content):
    return MD3Reader().read_bytes(_as_bytes(content))


def load_script(content: Content):
    return ShaderScriptReader().read_string(_as_text(content))


@dataclass
class FormatParsers:
    """Readers used for structured assets. Each takes raw content, returns a record."""
    load_map: Callable[[Content], Any] = field(default=load_map)
    load_model: Callable[[Content], Any] = field(default=load_model)
    load_script: Callable[[Content], Any] = field(default=load_script)


DEFAULT_PARSERS = FormatParsers()


def ingest(graph, name: str, content: Content = None) -> AssetVertex:
    """
    Add one file to graph.

    Reader errors propagate; whatever the processor registered before the
    failure stays in the graph.
    """
    config = graph.config
    parsers = graph.parsers or DEFAULT_PARSERS
    _, ext = split_extension(sanitize(name))

    if ext in config.audio_extensions:
        return graph.register_asset(name, AssetType.AUDIO)

    if ext in config.map_extensions:
        logger.info(f"Loading map {name}")
        bsp = parsers.load_map(content)
        v = process_map(graph, name, bsp)
        graph._record_map(sanitize(name), v)
        return v

    if ext in config.aas_extensions:
        return graph.register_asset(name, AssetType.AAS)

    if ext in config.model_extensions:
        logger.info(f"Loading model {name}")
        model = parsers.load_model(content)
        return process_model(graph, name, model)

    if ext in config.script_extensions:
        logger.info(f"Loading shader {name}")
        script = parsers.load_script(content)
        return process_script(graph, name, script)

    if ext in config.skin_extensions:
        return process_skin(graph, name)

    if ext in config.image_extensions:
        return graph.register_asset(name, AssetType.TEXTURE)

    return graph.register_asset(name, AssetType.MISC)
