"""Hierarchy descriptor codec."""

from flowtree.descriptor.codec import (
    DESCRIPTOR_KEY,
    decode,
    decode_strict,
    encode,
    erase_descriptor,
    read_descriptor,
    require_descriptor,
    write_descriptor,
)
from flowtree.descriptor.types import ChildRef, Descriptor

__all__ = [
    "DESCRIPTOR_KEY",
    "ChildRef",
    "Descriptor",
    "decode",
    "decode_strict",
    "encode",
    "erase_descriptor",
    "read_descriptor",
    "require_descriptor",
    "write_descriptor",
]
