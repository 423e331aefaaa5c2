"""
MD3 Reader - Quake III models.

Decodes the header and the per-surface shader names; frames, tags and
vertex data are skipped.

Format (little endian, offsets in the header are from file start, offsets in
a surface are from that surface's start):
- Header: "IDP3", version 15, name[64], flags, num_frames, num_tags,
  num_surfaces, num_skins, ofs_frames, ofs_tags, ofs_surfaces, ofs_end
- Surface: "IDP3", name[64], flags, num_frames, num_shaders, num_verts,
  num_triangles, ofs_triangles, ofs_shaders, ofs_st, ofs_xyz_normals, ofs_end
- Shader: name[64], shader_index
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..utils.binary import IoBuffer, ByteOrder

logger = logging.getLogger(__name__)

MAX_QPATH = 64
SHADER_RECORD_SIZE = MAX_QPATH + 4


@dataclass
class MD3Surface:
    """A surface and the shader names it may be drawn with."""
    name: str = ""
    shaders: List[str] = field(default_factory=list)


@dataclass
class MD3Model:
    """
    Model record consumed by the asset graph.

    MD3 files have no skin table (num_skins is unused by the game), so skins
    stays empty unless a caller fills it from .skin files found next to the
    model.
    """
    name: str = ""
    skins: List[Optional[str]] = field(default_factory=list)
    surfaces: List[MD3Surface] = field(default_factory=list)


class MD3Reader:
    """
    Reader for MD3 model files.

    Usage:
        model = MD3Reader().read_file("models/players/sarge/head.md3")
        print([s.shaders for s in model.surfaces])
    """

    MAGIC = b"IDP3"
    VERSION = 15

    def read_file(self, filepath: str) -> MD3Model:
        with open(filepath, 'rb') as f:
            return self.read_bytes(f.read())

    def read_bytes(self, data: bytes) -> MD3Model:
        io = IoBuffer.from_bytes(data, ByteOrder.LITTLE_ENDIAN)

        self._check_ident(io, "model")
        version = io.read_int32()
        if version != self.VERSION:
            raise ValueError(f"Unsupported MD3 version: {version}")

        model = MD3Model(name=io.read_cstring(MAX_QPATH))
        io.read_int32()                     # flags
        io.read_int32()                     # num_frames
        io.read_int32()                     # num_tags
        num_surfaces = io.read_int32()
        io.read_int32()                     # num_skins
        io.read_int32()                     # ofs_frames
        io.read_int32()                     # ofs_tags
        ofs_surfaces = io.read_int32()

        if num_surfaces < 0:
            raise ValueError(f"Negative MD3 surface count: {num_surfaces}")

        offset = ofs_surfaces
        for _ in range(num_surfaces):
            io.position = offset
            surface, surface_size = self._read_surface(io)
            model.surfaces.append(surface)
            if surface_size <= 0:
                raise ValueError(f"Invalid MD3 surface size {surface_size} at offset {offset}")
            offset += surface_size

        logger.debug(f"MD3 {model.name}: {len(model.surfaces)} surfaces")
        return model

    def _check_ident(self, io: IoBuffer, what: str):
        ident = io.read_bytes(4)
        if ident != self.MAGIC:
            raise ValueError(f"Invalid MD3 {what} ident: {ident!r}")

    def _read_surface(self, io: IoBuffer):
        start = io.position
        self._check_ident(io, "surface")

        surface = MD3Surface(name=io.read_cstring(MAX_QPATH))
        io.read_int32()                     # flags
        io.read_int32()                     # num_frames
        num_shaders = io.read_int32()
        io.read_int32()                     # num_verts
        io.read_int32()                     # num_triangles
        io.read_int32()                     # ofs_triangles
        ofs_shaders = io.read_int32()
        io.read_int32()                     # ofs_st
        io.read_int32()                     # ofs_xyz_normals
        ofs_end = io.read_int32()

        if num_shaders < 0:
            raise ValueError(f"Negative shader count on surface {surface.name!r}")

        io.position = start + ofs_shaders
        for _ in range(num_shaders):
            surface.shaders.append(io.read_cstring(MAX_QPATH))
            io.read_int32()                 # shader_index

        return surface, ofs_end
