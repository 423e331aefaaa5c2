"""
Shader script reader - Quake III .shader text files.

A script is a sequence of shader definitions:

    textures/base_wall/foo
    {
        surfaceparm nomarks
        {
            map textures/base_wall/foo_stage1.tga
            rgbGen identity
        }
        {
            animmap 4 textures/sfx/a.tga textures/sfx/b.tga
            blendFunc add
        }
    }

Directives are line oriented: a directive's arguments run to the end of its
line. Only the texture maps of each stage are kept.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from ..utils.binary import TEXT_ENCODING

logger = logging.getLogger(__name__)

# Stage directives taking a single image
SINGLE_MAP_DIRECTIVES = ("map", "clampmap")
# Stage directives taking a frequency followed by images
ANIM_MAP_DIRECTIVES = ("animmap",)


@dataclass
class ShaderStage:
    """One rendering pass of a shader."""
    maps: List[str] = field(default_factory=list)


@dataclass
class Shader:
    name: str = ""
    stages: List[ShaderStage] = field(default_factory=list)


Token = Tuple[str, int]


def tokenize(text: str) -> Iterator[Token]:
    """
    Yield (token, line_number) pairs.

    Comments are dropped, quoted strings lose their quotes and braces are
    always tokens of their own. Only control characters and space separate
    tokens, so bytes above 0x7f never split a name.
    """
    i, n, line = 0, len(text), 1
    while i < n:
        c = text[i]
        if c == "\n":
            line += 1
            i += 1
        elif c <= " ":
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ValueError(f"Unterminated comment starting on line {line}")
            line += text.count("\n", i, end)
            i = end + 2
        elif c in "{}":
            yield c, line
            i += 1
        elif c == '"':
            end = text.find('"', i + 1)
            if end == -1:
                raise ValueError(f"Unterminated string on line {line}")
            yield text[i + 1:end], line
            line += text.count("\n", i, end)
            i = end + 1
        else:
            start = i
            while i < n and text[i] > " " and text[i] not in '{}"':
                if text.startswith("//", i) or text.startswith("/*", i):
                    break
                i += 1
            yield text[start:i], line


class ShaderScriptReader:
    """
    Reader for shader scripts.

    Usage:
        shaders = ShaderScriptReader().read_file("scripts/base_wall.shader")
        for name, shader in shaders.items():
            print(name, [stage.maps for stage in shader.stages])
    """

    def read_file(self, filepath: str) -> Dict[str, Shader]:
        with open(filepath, 'r', encoding=TEXT_ENCODING) as f:
            return self.read_string(f.read())

    def read_string(self, text: str) -> Dict[str, Shader]:
        """Parse a script into shaders by name, in definition order."""
        shaders: Dict[str, Shader] = {}
        tokens = list(tokenize(text))
        pos = 0

        while pos < len(tokens):
            name, line = tokens[pos]
            if name in ("{", "}"):
                raise ValueError(f"Expected shader name on line {line}, got {name!r}")
            pos = self._expect_open(tokens, pos + 1, name)

            shader = Shader(name=name)
            pos = self._read_body(tokens, pos, shader)

            if name in shaders:
                # the game keeps the first definition
                logger.debug(f"Duplicate shader {name} on line {line} ignored")
                continue
            shaders[name] = shader

        return shaders

    def _expect_open(self, tokens: List[Token], pos: int, name: str) -> int:
        if pos >= len(tokens) or tokens[pos][0] != "{":
            raise ValueError(f"Expected '{{' after shader {name!r}")
        return pos + 1

    def _directive(self, tokens: List[Token], pos: int) -> Tuple[List[str], int]:
        """Collect the tokens on the current line, stopping at a brace."""
        line = tokens[pos][1]
        args = []
        while pos < len(tokens):
            tok, tok_line = tokens[pos]
            if tok_line != line or tok in ("{", "}"):
                break
            args.append(tok)
            pos += 1
        return args, pos

    def _read_body(self, tokens: List[Token], pos: int, shader: Shader) -> int:
        while pos < len(tokens):
            tok = tokens[pos][0]
            if tok == "}":
                return pos + 1
            if tok == "{":
                stage = ShaderStage()
                pos = self._read_stage(tokens, pos + 1, shader, stage)
                shader.stages.append(stage)
                continue
            _, pos = self._directive(tokens, pos)

        raise ValueError(f"Shader {shader.name!r} is missing its closing brace")

    def _read_stage(self, tokens: List[Token], pos: int, shader: Shader, stage: ShaderStage) -> int:
        while pos < len(tokens):
            tok, line = tokens[pos]
            if tok == "}":
                return pos + 1
            if tok == "{":
                raise ValueError(f"Nested block inside a stage of {shader.name!r} on line {line}")

            args, pos = self._directive(tokens, pos)
            keyword = args[0].lower()
            if keyword in SINGLE_MAP_DIRECTIVES:
                images = args[1:2]
            elif keyword in ANIM_MAP_DIRECTIVES:
                images = args[2:]
            else:
                continue

            for image in images:
                # $lightmap, $whiteimage and friends are generated by the renderer
                if image and not image.startswith("$"):
                    stage.maps.append(image)

        raise ValueError(f"Stage in shader {shader.name!r} is missing its closing brace")
