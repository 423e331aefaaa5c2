"""
BSP Reader - Quake III (IBSP) map files.

Only the two lumps the asset graph needs are decoded.

Format:
- Header: "IBSP" (4 bytes), version (4 bytes, 46 for Q3A, 47 for QL)
- Lump directory: 17 x (offset, length), int32 each
- Lump 0 (entities): NUL-terminated text of { "key" "value" ... } blocks
- Lump 1 (shaders): 72-byte records - name[64], surface flags, contents
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..utils.binary import IoBuffer, ByteOrder, TEXT_ENCODING

logger = logging.getLogger(__name__)

LUMP_ENTITIES = 0
LUMP_SHADERS = 1
LUMP_COUNT = 17

SHADER_NAME_LENGTH = 64
SHADER_RECORD_SIZE = SHADER_NAME_LENGTH + 8


@dataclass
class BSPShader:
    """One entry of the shader lump."""
    shader_name: str = ""
    surface_flags: int = 0
    contents: int = 0


@dataclass
class BSPMap:
    """Entities and shader lump of a map."""
    entities: List[Dict[str, str]] = field(default_factory=list)
    shaders: List[BSPShader] = field(default_factory=list)


class BSPReader:
    """
    Reader for IBSP map files.

    Usage:
        bsp = BSPReader().read_file("maps/q3dm1.bsp")
        for ent in bsp.entities:
            print(ent.get("classname"))
    """

    MAGIC = b"IBSP"
    VERSIONS = (46, 47)

    def read_file(self, filepath: str) -> BSPMap:
        with open(filepath, 'rb') as f:
            return self.read_bytes(f.read())

    def read_bytes(self, data: bytes) -> BSPMap:
        io = IoBuffer.from_bytes(data, ByteOrder.LITTLE_ENDIAN)

        magic = io.read_bytes(4)
        if magic != self.MAGIC:
            raise ValueError(f"Invalid BSP header: {magic!r}")

        version = io.read_int32()
        if version not in self.VERSIONS:
            raise ValueError(f"Unsupported BSP version: {version}")

        lumps = [(io.read_int32(), io.read_int32()) for _ in range(LUMP_COUNT)]

        bsp = BSPMap()
        bsp.entities = parse_entities(self._lump_text(io, *lumps[LUMP_ENTITIES]))
        bsp.shaders = self._read_shaders(io, *lumps[LUMP_SHADERS])

        logger.debug(f"BSP v{version}: {len(bsp.entities)} entities, {len(bsp.shaders)} shaders")
        return bsp

    def _lump_text(self, io: IoBuffer, offset: int, length: int) -> str:
        raw = io.slice(offset, length)
        null_idx = raw.find(b"\0")
        if null_idx != -1:
            raw = raw[:null_idx]
        return raw.decode(TEXT_ENCODING)

    def _read_shaders(self, io: IoBuffer, offset: int, length: int) -> List[BSPShader]:
        if length % SHADER_RECORD_SIZE:
            raise ValueError(f"Shader lump length {length} is not a multiple of {SHADER_RECORD_SIZE}")

        lump = IoBuffer.from_bytes(io.slice(offset, length), ByteOrder.LITTLE_ENDIAN)
        shaders = []
        for _ in range(length // SHADER_RECORD_SIZE):
            shaders.append(BSPShader(
                shader_name=lump.read_cstring(SHADER_NAME_LENGTH),
                surface_flags=lump.read_int32(),
                contents=lump.read_int32(),
            ))
        return shaders


def _tokens(text: str):
    """Yield (is_brace, text) for braces and quoted strings."""
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c <= " ":
            i += 1
        elif c in "{}":
            yield True, c
            i += 1
        elif c == '"':
            end = text.find('"', i + 1)
            if end == -1:
                raise ValueError(f"Unterminated string in entity lump at offset {i}")
            yield False, text[i + 1:end]
            i = end + 1
        else:
            raise ValueError(f"Unexpected character {c!r} in entity lump at offset {i}")


def parse_entities(text: str) -> List[Dict[str, str]]:
    """
    Parse entity lump text into one dict per entity.

    Strings are returned without their quotes; a repeated key keeps the
    last value, as the game does.
    """
    entities: List[Dict[str, str]] = []
    current = None
    pending_key = None

    for is_brace, tok in _tokens(text):
        if is_brace and tok == "{" and current is None:
            current = {}
        elif is_brace and tok == "}" and current is not None and pending_key is None:
            entities.append(current)
            current = None
        elif is_brace:
            raise ValueError(f"Unbalanced brace in entity lump after {len(entities)} entities")
        elif current is None:
            raise ValueError("Key/value pair outside of an entity block")
        elif pending_key is None:
            pending_key = tok
        else:
            current[pending_key] = tok
            pending_key = None

    if current is not None:
        raise ValueError("Entity lump ends inside an entity block")
    return entities
