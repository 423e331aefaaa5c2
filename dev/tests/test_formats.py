"""Format reader tests - BSP, MD3 and shader scripts."""

import pytest

from assetgraph.formats import (
    BSPReader,
    MD3Reader,
    ShaderScriptReader,
    parse_entities,
    tokenize,
)
from builders import build_bsp, build_md3


# ═══════════════════════════════════════════════════════════════════════════════
# BSP
# ═══════════════════════════════════════════════════════════════════════════════

ENTITIES = """{
"classname" "worldspawn"
"message" "Arena {of} Death"
"music" "music/sonic1.wav"
}
{
"classname" "target_speaker"
"noise" "sound/world/fire.wav"
"targetname" ""
}
"""


def test_bsp_entities_and_shaders():
    data = build_bsp(ENTITIES, ["textures/base_wall/foo", "noshader"])
    bsp = BSPReader().read_bytes(data)

    assert bsp.entities == [
        {"classname": "worldspawn", "message": "Arena {of} Death", "music": "music/sonic1.wav"},
        {"classname": "target_speaker", "noise": "sound/world/fire.wav", "targetname": ""},
    ]
    assert [s.shader_name for s in bsp.shaders] == ["textures/base_wall/foo", "noshader"]
    assert bsp.shaders[0].contents == 1


def test_non_ascii_names_stay_distinct():
    names = ["textures/é".encode("utf-8"), "textures/ü".encode("utf-8")]
    bsp = BSPReader().read_bytes(build_bsp(shader_names=names))
    model = MD3Reader().read_bytes(build_md3("m", [("s", names)]))

    decoded = [n.decode("latin-1") for n in names]
    assert [s.shader_name for s in bsp.shaders] == decoded
    assert model.surfaces[0].shaders == decoded


def test_bsp_version_47_is_accepted():
    assert BSPReader().read_bytes(build_bsp(version=47)).entities == []


def test_bsp_read_file(tmp_path):
    path = tmp_path / "q3dm1.bsp"
    path.write_bytes(build_bsp(ENTITIES))
    assert len(BSPReader().read_file(str(path)).entities) == 2


@pytest.mark.parametrize("data", [
    b"VBSP" + build_bsp()[4:],
    build_bsp(version=38),
    build_bsp()[:100],
    b"",
])
def test_bsp_rejects_bad_files(data):
    with pytest.raises(ValueError):
        BSPReader().read_bytes(data)


def test_bsp_rejects_ragged_shader_lump():
    data = bytearray(build_bsp(shader_names=["a"]))
    # shrink the shader lump length in the directory entry for lump 1
    data[20:24] = (71).to_bytes(4, "little")
    with pytest.raises(ValueError):
        BSPReader().read_bytes(bytes(data))


def test_entity_key_repeated_keeps_last():
    assert parse_entities('{ "a" "1" "a" "2" }') == [{"a": "2"}]


@pytest.mark.parametrize("text", [
    '{ "a" "1" ',
    '"a" "1"',
    '{ "a" }',
    '{ { } }',
    '{ "a" "1 }',
    '{ a 1 }',
])
def test_entity_syntax_errors(text):
    with pytest.raises(ValueError):
        parse_entities(text)


# ═══════════════════════════════════════════════════════════════════════════════
# MD3
# ═══════════════════════════════════════════════════════════════════════════════

def test_md3_surfaces_and_shaders():
    data = build_md3("head", [
        ("h_head", ["models/players/sarge/band.tga", ""]),
        ("h_cigar", ["models/players/sarge/cigar.tga"]),
        ("h_empty", []),
    ])
    model = MD3Reader().read_bytes(data)

    assert model.name == "head"
    assert model.skins == []
    assert [s.name for s in model.surfaces] == ["h_head", "h_cigar", "h_empty"]
    assert model.surfaces[0].shaders == ["models/players/sarge/band.tga", ""]
    assert model.surfaces[1].shaders == ["models/players/sarge/cigar.tga"]
    assert model.surfaces[2].shaders == []


@pytest.mark.parametrize("data", [
    b"IDP2" + build_md3()[4:],
    build_md3()[:4] + (16).to_bytes(4, "little") + build_md3()[8:],
    build_md3("m", [("s", ["a"])])[:150],
    b"ID",
])
def test_md3_rejects_bad_files(data):
    with pytest.raises(ValueError):
        MD3Reader().read_bytes(data)


# ═══════════════════════════════════════════════════════════════════════════════
# SHADER SCRIPTS
# ═══════════════════════════════════════════════════════════════════════════════

SCRIPT = """
// base_wall shaders
textures/base_wall/foo
{
    qer_editorimage textures/base_wall/foo_editor.tga
    surfaceparm nomarks
    {
        map $lightmap
        rgbGen identity
    }
    {
        Map textures/base_wall/foo_stage1.tga // trailing comment
        blendFunc GL_DST_COLOR GL_ZERO
    }
    /* a stage
       left commented out
    {
        map textures/base_wall/disabled.tga
    }
    */
    {
        animmap 4 textures/sfx/a.tga textures/sfx/b.tga "textures/sfx/c.tga"
    }
    {
        clampmap textures/sfx/glow.tga
        videomap video/intro.roq
    }
}

textures/base_wall/bar
{
    {
        map $whiteimage
    }
}

textures/base_wall/foo
{
    {
        map textures/base_wall/redefined.tga
    }
}
"""


def test_shader_script_stages_and_maps():
    shaders = ShaderScriptReader().read_string(SCRIPT)

    assert list(shaders) == ["textures/base_wall/foo", "textures/base_wall/bar"]
    foo = shaders["textures/base_wall/foo"]
    assert [stage.maps for stage in foo.stages] == [
        [],
        ["textures/base_wall/foo_stage1.tga"],
        ["textures/sfx/a.tga", "textures/sfx/b.tga", "textures/sfx/c.tga"],
        ["textures/sfx/glow.tga"],
    ]
    assert [stage.maps for stage in shaders["textures/base_wall/bar"].stages] == [[]]


def test_shader_script_read_file(tmp_path):
    path = tmp_path / "base_wall.shader"
    path.write_text(SCRIPT)
    assert len(ShaderScriptReader().read_file(str(path))) == 2


def test_shader_names_keep_every_byte(tmp_path):
    # U+00E0 and U+00C5 are C3 A0 and C3 85 in UTF-8; A0 and 85 are not separators
    names = ["textures/é", "textures/à", "textures/Å"]
    raw = "".join(f"{name}\n{{\n}}\n" for name in names).encode("utf-8")
    path = tmp_path / "accents.shader"
    path.write_bytes(raw)

    expected = [name.encode("utf-8").decode("latin-1") for name in names]
    assert list(ShaderScriptReader().read_file(str(path))) == expected
    assert list(tokenize(raw.decode("latin-1")))[0] == (expected[0], 1)


def test_empty_script():
    assert ShaderScriptReader().read_string("// nothing here\n") == {}


def test_tokenize_tracks_lines():
    tokens = list(tokenize('a{\n/* x\ny */ "b c"}\n// d\ne'))
    assert tokens == [("a", 1), ("{", 1), ("b c", 3), ("}", 3), ("e", 5)]


@pytest.mark.parametrize("text", [
    "textures/a { { map a.tga }",
    "textures/a { map a.tga",
    "textures/a map a.tga }",
    "{ }",
    "textures/a { { { } } }",
    "textures/a { /* }",
    'textures/a { "x }',
])
def test_shader_syntax_errors(text):
    with pytest.raises(ValueError):
        ShaderScriptReader().read_string(text)
