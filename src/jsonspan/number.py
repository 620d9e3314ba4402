from __future__ import annotations

import math
import re
from dataclasses import dataclass

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1


def _saturate(value: float, low: int, high: int) -> int:
    if math.isnan(value):
        return 0
    if value <= low:
        return low
    if value >= high:
        return high
    return int(value)


@dataclass(frozen=True, init=False, repr=False)
class Number:
    """A JSON numeric literal kept as text until a numeric view is requested.

    Every conversion is total: text that is not a JSON number converts to
    zero, out-of-range values saturate at the bounds of the target domain.
    """

    raw: str

    def __init__(self, raw: str | bytes | bytearray) -> None:
        if isinstance(raw, (bytes, bytearray)):
            raw = bytes(raw).decode("utf-8", errors="replace")
        elif not isinstance(raw, str):
            raise TypeError(f"Number expects str or bytes, got {type(raw).__name__}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_bytes(cls, raw: bytes | bytearray) -> Number:
        return cls(raw)

    def as_str(self) -> str:
        return self.raw

    def _match(self):
        return _NUMBER_RE.fullmatch(self.raw)

    def is_valid(self) -> bool:
        """Whether the text is a well-formed JSON number."""
        return self._match() is not None

    def _is_integer_literal(self) -> bool:
        match = self._match()
        return match is not None and match.group(1) is None and match.group(2) is None

    def to_f64(self) -> float:
        if self._match() is None:
            return 0.0
        return float(self.raw)

    def to_i64(self) -> int:
        if self._is_integer_literal():
            value = int(self.raw)
            if _I64_MIN <= value <= _I64_MAX:
                return value
        return _saturate(self.to_f64(), _I64_MIN, _I64_MAX)

    def to_u64(self) -> int:
        if self._is_integer_literal():
            value = int(self.raw)
            if 0 <= value <= _U64_MAX:
                return value
        return _saturate(self.to_f64(), 0, _U64_MAX)

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Number({self.raw!r})"
