from __future__ import annotations

from .getter import Getter
from .number import Number
from .value import Value, ValueKind


def get(json: str | bytes, path: str) -> Value | None:
    """Find the value at ``path`` in a JSON document without parsing all of it.

        name = get('{"user":{"name":"Alice"}}', "user.name")
        assert name == "Alice"

        count = get('{"logs":["a","b"]}', "logs.#")
        assert count.to_i64() == 2

    Returns ``None`` when nothing is at ``path``.
    """
    return Getter(json).get(path)


def get_by_utf8(json: bytes, path: bytes) -> Value | None:
    return Getter(json).get_by_utf8(path)


def parse(json: str | bytes) -> Value | None:
    """Wrap the first value in ``json`` without decoding its children."""
    return Getter(json).value()


__all__ = ["Getter", "Number", "Value", "ValueKind", "get", "get_by_utf8", "parse"]
