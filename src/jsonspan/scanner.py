"""Character-level primitives for walking a raw JSON span.

Nothing here builds a tree or validates a document: each function finds
where the next construct ends so callers can slice it out. Malformed or
truncated input ends a walk early instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import ijson

logger = logging.getLogger(__name__)

_WHITESPACE = frozenset(" \t\n\r")
_SCALAR_STOP = frozenset(" \t\n\r,:]}")
_CLOSERS = {"{": "}", "[": "]"}


def skip_whitespace(text: str, pos: int) -> int:
    length = len(text)
    while pos < length and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def scan_string(text: str, pos: int) -> int | None:
    """Return the index just past the closing quote of the string at ``pos``."""
    length = len(text)
    pos += 1
    while pos < length:
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        pos += 1
        if char == '"':
            return pos
    return None


def scan_composite(text: str, pos: int) -> int | None:
    """Return the index just past the bracket closing the object or array at ``pos``."""
    stack = [_CLOSERS[text[pos]]]
    length = len(text)
    pos += 1
    while pos < length:
        char = text[pos]
        if char == '"':
            end = scan_string(text, pos)
            if end is None:
                return None
            pos = end
            continue
        if char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char == "}" or char == "]":
            if char != stack.pop():
                logger.debug("Mismatched %r at offset %d", char, pos)
                return None
            if not stack:
                return pos + 1
        pos += 1
    return None


def scan_scalar(text: str, pos: int) -> int | None:
    length = len(text)
    end = pos
    while end < length and text[end] not in _SCALAR_STOP:
        end += 1
    return end if end > pos else None


def scan_value(text: str, pos: int) -> int | None:
    """Return the end of whatever JSON value starts at ``pos``."""
    if pos >= len(text):
        return None
    char = text[pos]
    if char == '"':
        return scan_string(text, pos)
    if char in _CLOSERS:
        return scan_composite(text, pos)
    return scan_scalar(text, pos)


def unescape(body: str) -> str:
    """Decode the escapes in the content of a JSON string literal.

    ``body`` is the text between the quotes. Content without a backslash is
    returned as is; anything else goes through ijson. If ijson rejects the
    literal the raw content is returned.
    """
    if "\\" not in body:
        return body
    events = ijson.sendable_list()
    coro = ijson.basic_parse_coro(events)
    try:
        coro.send(f'"{body}"'.encode("utf-8"))
        coro.close()
    except (ijson.JSONError, ValueError) as exc:
        logger.debug("Keeping raw string content %r: %s", body, exc)
        return body
    for event, value in events:
        if event == "string":
            return value
    return body


def iter_array(text: str, pos: int) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` for each element of the array opening at ``pos``."""
    length = len(text)
    pos = skip_whitespace(text, pos + 1)
    if pos < length and text[pos] == "]":
        return
    while pos < length:
        end = scan_value(text, pos)
        if end is None:
            logger.debug("Unreadable array element at offset %d", pos)
            return
        yield pos, end
        pos = skip_whitespace(text, end)
        if pos < length and text[pos] == ",":
            pos = skip_whitespace(text, pos + 1)
            continue
        if pos < length and text[pos] == "]":
            return
        break
    logger.debug("Array not closed at offset %d", pos)


def iter_object(text: str, pos: int) -> Iterator[tuple[str, int, int]]:
    """Yield ``(key, start, end)`` for each member of the object opening at ``pos``.

    Keys are unescaped; ``start``/``end`` delimit the member's value.
    """
    length = len(text)
    pos = skip_whitespace(text, pos + 1)
    if pos < length and text[pos] == "}":
        return
    while pos < length:
        if text[pos] != '"':
            break
        key_end = scan_string(text, pos)
        if key_end is None:
            break
        key = unescape(text[pos + 1 : key_end - 1])
        pos = skip_whitespace(text, key_end)
        if pos >= length or text[pos] != ":":
            break
        pos = skip_whitespace(text, pos + 1)
        end = scan_value(text, pos)
        if end is None:
            break
        yield key, pos, end
        pos = skip_whitespace(text, end)
        if pos < length and text[pos] == ",":
            pos = skip_whitespace(text, pos + 1)
            continue
        if pos < length and text[pos] == "}":
            return
        break
    logger.debug("Object member unreadable at offset %d", pos)
