from __future__ import annotations

import logging

from . import scanner
from .number import Number
from .path import Component, Query, parse_path, wildcard
from .value import Value

logger = logging.getLogger(__name__)

_LITERALS = {
    "true": Value.boolean(True),
    "false": Value.boolean(False),
    "null": Value.null(),
}

# A located value together with the raw JSON text it was read from.
_Found = tuple[Value, str]


def _read(text: str, start: int, end: int) -> Value | None:
    raw = text[start:end]
    head = raw[:1]
    if head == '"':
        return Value.string(scanner.unescape(raw[1:-1]))
    if head == "{":
        return Value.object(raw)
    if head == "[":
        return Value.array(raw)
    if head == "-" or head.isdigit():
        return Value.number(Number(raw))
    return _LITERALS.get(raw)


def _found(text: str, start: int, end: int) -> _Found | None:
    value = _read(text, start, end)
    if value is None:
        logger.debug("No JSON value at offset %d: %r", start, text[start:end])
        return None
    return value, text[start:end]


def _collect(raws: list[str]) -> _Found:
    raw = "[" + ",".join(raws) + "]"
    return Value.array(raw), raw


def _compare(candidate: Value, op: str, rhs: Value) -> bool:
    if candidate.kind is not rhs.kind:
        return op in ("!=", "!%")
    if op == "%" or op == "!%":
        if not rhs.is_string():
            return False
        like = wildcard(rhs.as_str()).fullmatch(candidate.as_str()) is not None
        return like if op == "%" else not like
    if rhs.is_number():
        left, right = candidate.to_f64(), rhs.to_f64()
    elif rhs.is_string():
        left, right = candidate.as_str(), rhs.as_str()
    else:
        left, right = candidate.payload, rhs.payload
    if op == "==":
        return left == right
    if op == "!=":
        return left != right
    if rhs.is_bool() or rhs.is_null():
        return False
    if op == "<":
        return left < right
    if op == "<=":
        return left <= right
    if op == ">":
        return left > right
    if op == ">=":
        return left >= right
    return False


def _matches(element: Value, query: Query) -> bool:
    candidate = element.get(query.lhs) if query.lhs else element
    if candidate is None:
        return False
    if query.op is None:
        return True
    rhs = Getter(query.rhs).value()
    if rhs is None or (rhs.is_number() and not rhs.payload.is_valid()):
        rhs = Value.string(query.rhs)
    return _compare(candidate, query.op, rhs)


class Getter:
    """Navigates a raw JSON span by path without decoding the rest of it."""

    def __init__(self, span: str | bytes | bytearray) -> None:
        if isinstance(span, (bytes, bytearray)):
            span = bytes(span).decode("utf-8", errors="replace")
        self._text = span

    @classmethod
    def from_str(cls, span: str) -> Getter:
        return cls(span)

    def _start(self) -> int:
        return scanner.skip_whitespace(self._text, 0)

    def value(self) -> Value | None:
        """The value the span starts with, or ``None`` if there is none."""
        start = self._start()
        end = scanner.scan_value(self._text, start)
        if end is None:
            return None
        return _read(self._text, start, end)

    def get(self, path: str) -> Value | None:
        components = parse_path(path)
        if not components:
            return None
        found = self._resolve(self._start(), components)
        return found[0] if found is not None else None

    def get_by_utf8(self, path: bytes | bytearray) -> Value | None:
        return self.get(bytes(path).decode("utf-8", errors="replace"))

    def to_vec(self) -> list[Value]:
        start = self._start()
        if not self._text.startswith("[", start):
            return []
        values = []
        for begin, end in scanner.iter_array(self._text, start):
            value = _read(self._text, begin, end)
            if value is not None:
                values.append(value)
        return values

    def to_object(self) -> dict[str, Value]:
        start = self._start()
        if not self._text.startswith("{", start):
            return {}
        members = {}
        for key, begin, end in scanner.iter_object(self._text, start):
            value = _read(self._text, begin, end)
            if value is not None:
                members[key] = value
        return members

    def _resolve(self, pos: int, components: list[Component]) -> _Found | None:
        text = self._text
        if pos >= len(text):
            return None
        head = text[pos]
        if head == "{":
            return self._resolve_object(pos, components)
        if head == "[":
            return self._resolve_array(pos, components)
        return None

    def _descend(self, start: int, end: int, rest: list[Component]) -> _Found | None:
        if not rest:
            return _found(self._text, start, end)
        return self._resolve(start, rest)

    def _resolve_object(self, pos: int, components: list[Component]) -> _Found | None:
        component, rest = components[0], components[1:]
        if component.count or component.query is not None:
            return None
        for key, start, end in scanner.iter_object(self._text, pos):
            if component.matches(key):
                return self._descend(start, end, rest)
        return None

    def _resolve_array(self, pos: int, components: list[Component]) -> _Found | None:
        component, rest = components[0], components[1:]
        elements = scanner.iter_array(self._text, pos)

        if component.count:
            if not rest:
                count = str(sum(1 for _ in elements))
                return Value.number(Number(count)), count
            raws = []
            for start, _end in elements:
                found = self._resolve(start, rest)
                if found is not None:
                    raws.append(found[1])
            return _collect(raws)

        if component.query is not None:
            raws = []
            for start, end in elements:
                element = _read(self._text, start, end)
                if element is None or not _matches(element, component.query):
                    continue
                found = self._descend(start, end, rest)
                if not component.query_all:
                    return found
                if found is not None:
                    raws.append(found[1])
            return _collect(raws) if component.query_all else None

        index = component.index()
        if index is None:
            return None
        for position, (start, end) in enumerate(elements):
            if position == index:
                return self._descend(start, end, rest)
        return None
