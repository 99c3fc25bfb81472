"""
Indexed-pixel frames for external image encoders.

A frame expands every grid cell into a tile_size x tile_size block holding
its symbol's palette index. Encoding and writing the frames is left to the
caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_types import Grid

# RGB colour for each symbol, indexed by Symbol.index
PALETTE: tuple[tuple[int, int, int], ...] = (
    (0x00, 0x00, 0x00),  # BLACK
    (0xFF, 0xF1, 0xE8),  # WHITE
    (0xFF, 0x00, 0x4D),  # RED
    (0x00, 0xE4, 0x36),  # GREEN
    (0x29, 0xAD, 0xFF),  # BLUE
    (0x00, 0x87, 0x51),  # EMERALD
)


def flat_palette() -> bytes:
    """The palette as r, g, b bytes per symbol."""
    return bytes(channel for rgb in PALETTE for channel in rgb)


@dataclass(frozen=True)
class IndexedFrame:
    """A still image: row-major palette indices."""

    width: int
    height: int
    pixels: bytes


def render_frame(grid: Grid, tile_size: int) -> IndexedFrame:
    """Render one still frame of the grid at `tile_size` pixels per cell."""
    if tile_size < 1:
        raise ValueError(f"tile_size must be >= 1, got {tile_size}")

    width = grid.width * tile_size
    height = grid.height * tile_size
    pixels = bytearray()

    for row in grid.rows():
        line = bytearray()
        for symbol in row:
            line.extend([symbol.index] * tile_size)
        pixels.extend(bytes(line) * tile_size)

    return IndexedFrame(width, height, bytes(pixels))
