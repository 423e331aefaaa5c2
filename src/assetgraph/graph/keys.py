"""
Asset key normalization.

The game resolves a reference by basename and tries every format it knows
for that kind of asset, so "sound/foo.wav" and "sound/foo.ogg" are the same
asset. Keys collapse case, path separators and the concrete file extension
of audio, model and texture references.
"""

import posixpath

from .assets import AssetType

# Synthetic extensions per generalized type
GENERIC_EXTENSIONS = {
    AssetType.AUDIO: ".audio",
    AssetType.MODEL: ".model",
    AssetType.TEXTURE: ".texture",
}


def sanitize(raw: str) -> str:
    """Lower-case a path and use forward slashes only."""
    return raw.lower().replace("\\", "/")


def split_extension(path: str):
    """Split an extension off the last path component ("a.b/c" has none)."""
    return posixpath.splitext(path)


def replace_extension(path: str, ext: str) -> str:
    """Replace the extension of path, or append ext when there is none."""
    root, _ = split_extension(path)
    return root + ext


def generalize(path: str, asset_type: AssetType) -> str:
    """Swap the concrete extension for a synthetic per-type one."""
    generic = GENERIC_EXTENSIONS.get(asset_type)
    if generic is None:
        return path
    # textures are often referenced without an extension
    return replace_extension(path, generic)


def asset_key(raw: str, asset_type: AssetType) -> str:
    """Canonical key for a raw reference of the given type."""
    return generalize(sanitize(raw), asset_type)
