"""
Target-size specification for the seam carver.

A dimension string names the size to carve down to:
  - "<w>x<h>": both width and height
  - "<w>x":    width only, height unchanged
  - "x<h>":    height only, width unchanged
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional, Tuple

U32_MAX = 2**32 - 1

_DIMENSIONS_RE = re.compile(
    r"(?P<width>[0-9]+)x(?P<height>[0-9]+)"
    r"|(?P<only_width>[0-9]+)x"
    r"|x(?P<only_height>[0-9]+)"
)


class InvalidDimensionSpec(ValueError):
    """Raised when a dimension string does not follow the WxH grammar."""


def _parse_u32(digits: str, what: str) -> int:
    # u32 fits in 10 digits; longer fields never reach int()
    significant = digits.lstrip("0") or "0"
    if len(significant) > len(str(U32_MAX)):
        raise InvalidDimensionSpec(f"could not parse {what}")
    value = int(significant)
    if value > U32_MAX:
        raise InvalidDimensionSpec(f"could not parse {what}")
    return value


@dataclass(frozen=True)
class ResizeDimension:
    """Carving target: `kind` is one of "width", "height" or "both"."""
    kind: str
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def width_only(cls, width: int) -> "ResizeDimension":
        return cls("width", width=width)

    @classmethod
    def height_only(cls, height: int) -> "ResizeDimension":
        return cls("height", height=height)

    @classmethod
    def both(cls, width: int, height: int) -> "ResizeDimension":
        return cls("both", width=width, height=height)

    @classmethod
    def parse(cls, text: str) -> "ResizeDimension":
        m = _DIMENSIONS_RE.fullmatch(text)
        if m is None:
            raise InvalidDimensionSpec("invalid dimensions")
        if m.group("only_width") is not None:
            return cls.width_only(_parse_u32(m.group("only_width"), "width"))
        if m.group("only_height") is not None:
            return cls.height_only(_parse_u32(m.group("only_height"), "height"))
        return cls.both(
            _parse_u32(m.group("width"), "width"),
            _parse_u32(m.group("height"), "height"),
        )

    def resolve(self, width: int, height: int) -> Tuple[int, int]:
        """Target (width, height) for a source of the given size."""
        if self.kind == "width":
            return self.width, height
        if self.kind == "height":
            return width, self.height
        return self.width, self.height

    def __str__(self) -> str:
        w = "" if self.width is None else str(self.width)
        h = "" if self.height is None else str(self.height)
        return f"{w}x{h}"

