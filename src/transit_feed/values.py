"""Plain value types for colors and geographic points."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            channel = getattr(self, name)
            if not 0 <= channel <= 255:
                msg = f"{name} channel out of range: {channel}"
                raise ValueError(msg)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Build a color from a six-digit ``RRGGBB`` hex string.

        Raises:
            ValueError: If the text is not exactly six hex digits.
        """
        if len(text) != 6 or any(c not in "0123456789abcdefABCDEF" for c in text):
            msg = f"expected six hex digits, got {text!r}"
            raise ValueError(msg)
        return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))

    @property
    def hex(self) -> str:
        """The color as an upper-case ``RRGGBB`` string (alpha dropped)."""
        return f"{self.red:02X}{self.green:02X}{self.blue:02X}"


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float
