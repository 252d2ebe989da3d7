"""
Hashing of engine snapshots.

A snapshot is a flat mapping of field name to exact integer (or bool). It is
hashed as compact sorted-key JSON behind a tag naming what was hashed and the
encoding version, so digests of different record kinds never collide and a
change of encoding changes every digest.
"""

from __future__ import annotations

import hashlib
import json
from typing import Mapping, Union

ENCODING_VERSION = 1

Scalar = Union[int, bool]


def encode_fields(fields: Mapping[str, Scalar]) -> bytes:
    """Compact sorted-key JSON of *fields*; only str keys and int/bool values."""
    for key, value in fields.items():
        if not isinstance(key, str):
            raise TypeError(f"field names must be str, got {type(key).__name__}")
        if not isinstance(value, int):
            raise TypeError(f"field {key!r} must be an int or bool, got {type(value).__name__}")
    return json.dumps(dict(fields), sort_keys=True, separators=(",", ":")).encode("ascii")


def record_tag(kind: str) -> bytes:
    """``eclipseum:<kind>:v<version>`` followed by a NUL separator."""
    if not kind or not kind.isascii() or ":" in kind or "\x00" in kind:
        raise ValueError(f"invalid record kind: {kind!r}")
    return f"eclipseum:{kind}:v{ENCODING_VERSION}".encode("ascii") + b"\x00"


def digest_fields(kind: str, fields: Mapping[str, Scalar]) -> str:
    """Hex SHA-256 (``0x``-prefixed) of a tagged field mapping."""
    return "0x" + hashlib.sha256(record_tag(kind) + encode_fields(fields)).hexdigest()
