import math
import numbers
import re
from dataclasses import dataclass
from typing import Dict

from config import MRAD_PER_RAD

_POINT_SEP = re.compile(r"[\s,;]+")


@dataclass(frozen=True)
class Point:
    """Grid coordinate. Immutable, so one instance can be shared by several solvers."""
    x: int
    y: int

    def __post_init__(self):
        for axis in ("x", "y"):
            v = getattr(self, axis)
            if isinstance(v, bool) or not isinstance(v, numbers.Integral):
                raise TypeError(f"{axis} coordinate must be an integer, got {v!r}")
            object.__setattr__(self, axis, int(v))

    def label(self) -> str:
        return f"({self.x}, {self.y})"

    def as_pair(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


def parse_coord(s: str) -> int:
    s = (s or "").strip().replace(" ", "").replace("_", "")
    if not s:
        raise ValueError("empty coordinate")
    if len(s) >= 2 and s[0].lower() in ("x", "y"):
        s = s[1:]
    sign = 1
    if s[0] in "+-":
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if not s.isdigit():
        raise ValueError(f"coordinate must be digits, got {s!r}")
    return sign * int(s)


def parse_point(s: str) -> Point:
    parts = [p for p in _POINT_SEP.split((s or "").strip()) if p]
    if len(parts) != 2:
        raise ValueError(f"expected 'X,Y', got {s!r}")
    return Point(parse_coord(parts[0]), parse_coord(parts[1]))


def round_half_away(value: float) -> int:
    """Nearest integer, ties away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def rad_to_deg(rad: float) -> int:
    return round_half_away(rad * 180.0 / math.pi)


def rad_to_mrad(rad: float) -> int:
    return round_half_away(rad * MRAD_PER_RAD)
