"""Path grammar understood by :class:`jsonspan.Getter`.

A path is a ``.``-separated list of components. ``\\`` escapes the next
character. On objects a component names a key and may use the ``*`` and
``?`` wildcards; on arrays it is an index, ``#`` (count, or map the rest of
the path over every element), or a query ``#(...)`` / ``#(...)#``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Two-character operators first so "<=" is not read as "<".
_OPERATORS = ("==", "!=", "<=", ">=", "!%", "=", "<", ">", "%")


@dataclass(frozen=True)
class Query:
    lhs: str
    op: str | None = None
    rhs: str | None = None


@dataclass(frozen=True)
class Component:
    key: str
    pattern: re.Pattern | None = None
    count: bool = False
    query: Query | None = None
    query_all: bool = False

    def matches(self, key: str) -> bool:
        if self.pattern is not None:
            return self.pattern.fullmatch(key) is not None
        return key == self.key

    def index(self) -> int | None:
        if self.pattern is None and self.key.isascii() and self.key.isdigit():
            return int(self.key)
        return None


def wildcard(text: str) -> re.Pattern:
    """Compile a ``*``/``?`` wildcard into a regex; ``\\`` escapes."""
    parts = []
    chars = iter(text)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _scan_query(path: str, pos: int) -> int:
    """Return the index of the ``)`` closing the query opened at ``pos``."""
    depth = 0
    quote = False
    while pos < len(path):
        char = path[pos]
        if quote:
            if char == "\\":
                pos += 1
            elif char == '"':
                quote = False
        elif char == '"':
            quote = True
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return -1


def parse_query(text: str) -> Query:
    """Split a query into path, operator and operand.

    Operators inside quotes or nested ``(...)`` belong to the path.
    """
    quote = False
    depth = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if quote:
            if char == "\\":
                pos += 1
            elif char == '"':
                quote = False
        elif char == '"':
            quote = True
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0:
            for op in _OPERATORS:
                if text.startswith(op, pos):
                    return Query(
                        lhs=text[:pos].strip(),
                        op="==" if op == "=" else op,
                        rhs=text[pos + len(op) :].strip(),
                    )
        pos += 1
    return Query(lhs=text.strip())


def _component(
    literal: list[str], source: list[str], escaped: bool, wild: bool
) -> Component:
    key = "".join(literal)
    if key == "#" and not escaped:
        return Component(key=key, count=True)
    if wild:
        return Component(key=key, pattern=wildcard("".join(source)))
    return Component(key=key)


def parse_path(path: str) -> list[Component]:
    """Split ``path`` into components. An empty path has no components."""
    components: list[Component] = []
    if not path:
        return components
    pos = 0
    length = len(path)
    while True:
        if path.startswith("#(", pos):
            close = _scan_query(path, pos + 1)
            if close < 0:
                return []
            query = parse_query(path[pos + 2 : close])
            pos = close + 1
            query_all = path.startswith("#", pos)
            if query_all:
                pos += 1
            components.append(Component(key="", query=query, query_all=query_all))
            if pos >= length:
                return components
            if path[pos] != ".":
                return []
            pos += 1
            continue

        literal: list[str] = []
        source: list[str] = []
        escaped = wild = False
        while pos < length and path[pos] != ".":
            char = path[pos]
            if char == "\\" and pos + 1 < length:
                escaped = True
                char = path[pos + 1]
                literal.append(char)
                source.append("\\" + char if char in "*?\\" else char)
                pos += 2
                continue
            if char in "*?":
                wild = True
            literal.append(char)
            source.append(char)
            pos += 1
        components.append(_component(literal, source, escaped, wild))
        if pos >= length:
            return components
        pos += 1
