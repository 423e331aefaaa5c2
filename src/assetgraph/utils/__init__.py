"""Shared helpers for the format readers."""

from .binary import IoBuffer, ByteOrder, TEXT_ENCODING

__all__ = ['IoBuffer', 'ByteOrder', 'TEXT_ENCODING']
