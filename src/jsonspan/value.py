from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .number import Number


class ValueKind(Enum):
    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    BOOLEAN = "boolean"
    NULL = "null"


_COMPOSITES = frozenset({ValueKind.OBJECT, ValueKind.ARRAY})


@dataclass(frozen=True, eq=False, repr=False)
class Value:
    """A JSON value found by path, decoded only as far as it is asked to be.

    Strings, booleans and null carry their decoded payload. Numbers carry a
    :class:`Number` that keeps the literal text. Objects and arrays carry the
    raw JSON text they span, brackets included; looking into them scans that
    text again every time.

    Conversions never fail. A mismatched kind converts to zero, ``False``,
    an empty collection or ``None`` as documented on each method.
    """

    kind: ValueKind
    payload: str | Number | bool | None = None

    @classmethod
    def string(cls, text: str) -> Value:
        if not isinstance(text, str):
            raise TypeError(f"string payload must be str, got {type(text).__name__}")
        return cls(ValueKind.STRING, text)

    @classmethod
    def number(cls, number: Number | str | bytes) -> Value:
        if not isinstance(number, Number):
            number = Number(number)
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def object(cls, span: str) -> Value:
        return cls(ValueKind.OBJECT, _check_span(span, "{"))

    @classmethod
    def array(cls, span: str) -> Value:
        return cls(ValueKind.ARRAY, _check_span(span, "["))

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        if not isinstance(flag, bool):
            raise TypeError(f"boolean payload must be bool, got {type(flag).__name__}")
        return cls(ValueKind.BOOLEAN, flag)

    @classmethod
    def null(cls) -> Value:
        return cls(ValueKind.NULL)

    def get(self, path: str) -> Value | None:
        """Look up ``path`` inside an object or array.

        Scalars have no children, so every lookup on them returns ``None``.
        """
        if self.kind in _COMPOSITES:
            return self._getter().get(path)
        return None

    def get_by_utf8(self, path: bytes) -> Value | None:
        if self.kind in _COMPOSITES:
            return self._getter().get_by_utf8(path)
        return None

    def _getter(self):
        from .getter import Getter

        return Getter(self.payload)

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOLEAN

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_str(self) -> str:
        kind = self.kind
        if kind is ValueKind.STRING:
            return self.payload
        if kind is ValueKind.NUMBER:
            return self.payload.as_str()
        if kind is ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        if kind is ValueKind.OBJECT or kind is ValueKind.ARRAY:
            return self.payload
        if kind is ValueKind.NULL:
            return "null"
        raise AssertionError(f"unhandled value kind {kind!r}")

    def _numeric(self) -> Number | None:
        if self.kind is ValueKind.NUMBER:
            return self.payload
        if self.kind is ValueKind.STRING:
            return Number(self.payload)
        return None

    def to_f64(self) -> float:
        """Numbers and numeric strings convert; ``true`` is 1.0; anything else 0.0."""
        number = self._numeric()
        if number is not None:
            return number.to_f64()
        return 1.0 if self.kind is ValueKind.BOOLEAN and self.payload else 0.0

    def to_u64(self) -> int:
        number = self._numeric()
        if number is not None:
            return number.to_u64()
        return 1 if self.kind is ValueKind.BOOLEAN and self.payload else 0

    def to_i64(self) -> int:
        number = self._numeric()
        if number is not None:
            return number.to_i64()
        return 1 if self.kind is ValueKind.BOOLEAN and self.payload else 0

    def to_bool(self) -> bool:
        """Only a JSON ``true`` is true; the string ``"true"`` is not."""
        return self.kind is ValueKind.BOOLEAN and self.payload

    def to_vec(self) -> list[Value]:
        """Elements of an array; ``[]`` for null; ``[self]`` for anything else."""
        if self.kind is ValueKind.ARRAY:
            return self._getter().to_vec()
        if self.kind is ValueKind.NULL:
            return []
        return [self]

    def to_object(self) -> dict[str, Value]:
        if self.kind is ValueKind.OBJECT:
            return self._getter().to_object()
        return {}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self.kind is other.kind and self.payload == other.payload
        if isinstance(other, str):
            return self.as_str() == other
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.to_f64() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.payload))

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        if self.kind is ValueKind.STRING:
            return f'"{self.as_str()}"'
        return self.as_str()


def _check_span(span: str, opener: str) -> str:
    if not isinstance(span, str):
        raise TypeError(f"span must be str, got {type(span).__name__}")
    if span.lstrip(" \t\n\r")[:1] != opener:
        raise ValueError(f"span must start with {opener!r}: {span[:20]!r}")
    return span
