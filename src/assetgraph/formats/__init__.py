"""
Format readers for Quake III content.

Modules:
  - bsp: IBSP maps (entity lump, shader lump)
  - md3: MD3 models (surface shader names)
  - shader: .shader scripts (shaders, stages, stage texture maps)

Usage:
    from assetgraph.formats import BSPReader, MD3Reader, ShaderScriptReader

    bsp = BSPReader().read_file("maps/q3dm1.bsp")
    model = MD3Reader().read_file("models/mapobjects/lamp.md3")
    shaders = ShaderScriptReader().read_file("scripts/base_wall.shader")
"""

from .bsp import BSPMap, BSPReader, BSPShader, parse_entities
from .md3 import MD3Model, MD3Reader, MD3Surface
from .shader import Shader, ShaderScriptReader, ShaderStage, tokenize

__all__ = [
    # BSP
    'BSPMap', 'BSPReader', 'BSPShader', 'parse_entities',
    # MD3
    'MD3Model', 'MD3Reader', 'MD3Surface',
    # Shader scripts
    'Shader', 'ShaderScriptReader', 'ShaderStage', 'tokenize',
]
