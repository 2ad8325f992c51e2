"""Sample points and parsing of textual point lists.

A point list is a comma-separated sequence of pairs, where each pair is
written either as ``x/y`` or as a tuple ``(x, y)``:

    1/1, 2/4, 3/9
    [(1, 1), (2, 4), (3, 9)]
    (0/0,1/1)

Parsing never raises. Anything that does not match the grammar produces an
empty list so callers can treat "nothing usable" uniformly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

_NUMBER = r"[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|inf(?:inity)?|nan)"
_PAIR_RE = re.compile(
    rf"\s*(?:\(\s*({_NUMBER})\s*,\s*({_NUMBER})\s*\)|({_NUMBER})\s*/\s*({_NUMBER}))\s*",
    re.IGNORECASE,
)
_SEPARATOR_RE = re.compile(r"\s*,\s*")
_CLOSING = {"(": ")", "[": "]"}


@dataclass(frozen=True)
class XYPair:
    """A single (x, y) sample."""

    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "XYPair":
        """Build a pair from the first two entries of ``values``."""
        if len(values) < 2:
            raise ValueError(f"Expected at least two values, got {len(values)}.")
        return cls(values[0], values[1])

    def __str__(self) -> str:
        return format_xy_pair(self)


def format_xy_pair(point: XYPair) -> str:
    """Render a point as ``x/y`` using round-trip float text."""
    return f"{point.x!r}/{point.y!r}"


def _pair_from_match(m: re.Match) -> XYPair:
    if m.group(1) is not None:
        return XYPair(float(m.group(1)), float(m.group(2)))
    return XYPair(float(m.group(3)), float(m.group(4)))


def parse_xy_pair(text: Optional[str]) -> Optional[XYPair]:
    """Parse a single ``x/y`` or ``(x, y)`` pair, or return ``None``."""
    if not text:
        return None
    m = _PAIR_RE.fullmatch(text)
    if m is None:
        return None
    return _pair_from_match(m)


def _parse_body(body: str) -> Optional[List[XYPair]]:
    """Parse a bracket-free pair list, or return ``None`` on any mismatch."""
    if not body.strip():
        return None
    pairs = []
    pos = 0
    end = len(body)
    while True:
        m = _PAIR_RE.match(body, pos)
        if m is None:
            return None
        pairs.append(_pair_from_match(m))
        pos = m.end()
        if pos == end:
            return pairs
        sep = _SEPARATOR_RE.match(body, pos)
        if sep is None or sep.end() == end:
            return None
        pos = sep.end()


def _matching_bracket(text: str, start: int) -> int:
    """Return the index closing the bracket at ``start``, or ``-1``."""
    opener = text[start]
    closer = _CLOSING[opener]
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_xy_pairs(text: Optional[str]) -> List[XYPair]:
    """Parse a point list whose enclosing brackets are optional.

    Args:
        text: Point list such as ``"1/1,2/4"`` or ``"[(1, 1), (2, 4)]"``.

    Returns:
        list[XYPair]: Parsed points in input order, or an empty list when the
        input is ``None``, blank, or malformed.
    """
    if not text:
        return []
    stripped = text.strip()
    if not stripped:
        return []

    pairs = _parse_body(stripped)
    if pairs is not None:
        return pairs

    if stripped[0] in _CLOSING and stripped[-1] == _CLOSING[stripped[0]]:
        if _matching_bracket(stripped, 0) == len(stripped) - 1:
            return _parse_body(stripped[1:-1]) or []
    return []


def parse_xy_pairs_at(text: Optional[str], start: int = 0) -> List[XYPair]:
    """Parse a bracketed point list beginning at ``start``.

    The list must open with ``(`` or ``[`` (leading whitespace allowed) and
    close with the matching bracket. Anything after the closing bracket is
    ignored, which lets a list be read out of a larger string.

    Returns:
        list[XYPair]: Parsed points, or an empty list on any mismatch.
    """
    if not text or start < 0 or start >= len(text):
        return []
    pos = start
    while pos < len(text) and text[pos].isspace():
        pos += 1
    if pos >= len(text) or text[pos] not in _CLOSING:
        return []
    close = _matching_bracket(text, pos)
    if close < 0:
        return []
    return _parse_body(text[pos + 1 : close]) or []
