"""
Shared type definitions for the markovgrid system.

Points, symbols, the generic row-major grid, patterns (grids of optional
symbols) and find/replace rules.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass
from enum import Enum
from typing import ClassVar, Generic, Iterator, Sequence, TypeVar

T = TypeVar("T")
G = TypeVar("G", bound="GenericGrid")


# =============================================================================
# Errors
# =============================================================================


class OutOfBoundsError(IndexError):
    """A grid was indexed, or a pattern placed, outside the grid extents."""


class PatternFormatError(ValueError):
    """A textual pattern or grid literal could not be parsed."""


class ShapeMismatchError(ValueError):
    """A rule's find and replace patterns have different dimensions."""


# =============================================================================
# Geometry
# =============================================================================


@dataclass(frozen=True)
class Point:
    """A non-negative integer position; pattern-local or grid-global."""

    x: int
    y: int

    ZERO: ClassVar[Point]

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"point coordinates must be non-negative, got {self}")

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


Point.ZERO = Point(0, 0)


# =============================================================================
# Symbols
# =============================================================================


class Symbol(Enum):
    """Tile value held by a grid cell. The value is its literal character."""

    BLACK = "B"
    WHITE = "W"
    RED = "R"
    GREEN = "G"
    BLUE = "U"
    EMERALD = "E"

    @classmethod
    def default(cls) -> Symbol:
        return cls.BLACK

    @classmethod
    def from_char(cls, char: str) -> Symbol:
        try:
            return cls(char)
        except ValueError:
            raise PatternFormatError(f"unrecognized symbol '{char}'") from None

    @property
    def index(self) -> int:
        """Stable palette index (declaration order)."""
        return _SYMBOL_ORDER.index(self)


_SYMBOL_ORDER: tuple[Symbol, ...] = tuple(Symbol)


# =============================================================================
# Grids
# =============================================================================


@dataclass
class GenericGrid(Generic[T]):
    """A fixed-size 2D grid stored row-major: offset = y * width + x."""

    width: int
    height: int
    cells: list[T]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"negative grid size {self.width}x{self.height}")
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"{self.width}x{self.height} grid needs {self.width * self.height} cells, "
                f"got {len(self.cells)}"
            )

    @classmethod
    def filled(cls, width: int, height: int, value: T) -> GenericGrid[T]:
        return cls(width, height, [value] * (width * height))

    def find_offset(self, at: Point) -> int:
        if not (0 <= at.x < self.width and 0 <= at.y < self.height):
            raise OutOfBoundsError(
                f"at {at} is out-of-bounds for {self.width}x{self.height} grid"
            )
        return at.y * self.width + at.x

    def __getitem__(self, at: Point) -> T:
        return self.cells[self.find_offset(at)]

    def __setitem__(self, at: Point, value: T) -> None:
        self.cells[self.find_offset(at)] = value

    def rows(self) -> Iterator[tuple[T, ...]]:
        for y in range(self.height):
            yield tuple(self.cells[y * self.width : (y + 1) * self.width])

    def rotate_cw(self: G) -> G:
        """
        Return a copy turned 90° clockwise; the receiver is left untouched.

        A W×H grid becomes H×W, and new[(x, y)] == old[(y, H - 1 - x)].
        Four turns reproduce the original grid.
        """
        cells: list[T] = []
        for x in range(self.width):
            for y in reversed(range(self.height)):
                cells.append(self.cells[y * self.width + x])
        return type(self)(self.height, self.width, cells)


@dataclass
class Pattern(GenericGrid["Symbol | None"]):
    """
    An immutable grid of optional symbols. A None cell is a wildcard: it
    matches anything in find position and leaves the cell alone in replace
    position.
    """

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(self.cells))
        super().__post_init__()
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: object) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f"cannot assign to field '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field '{name}'")

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.cells))

    @classmethod
    def from_cells(cls, row: Sequence[Symbol | None]) -> Pattern:
        """Build a single-row pattern."""
        return cls(len(row), 1, tuple(row))

    def __setitem__(self, at: Point, value: Symbol | None) -> None:
        raise TypeError("patterns are immutable")

    def is_wildcard(self) -> bool:
        return all(cell is None for cell in self.cells)


@dataclass(frozen=True)
class Rule:
    """A local rewrite: where `find` matches, write `replace`."""

    find: Pattern
    replace: Pattern

    def __post_init__(self) -> None:
        if (self.find.width, self.find.height) != (self.replace.width, self.replace.height):
            raise ShapeMismatchError(
                f"find is {self.find.width}x{self.find.height} but "
                f"replace is {self.replace.width}x{self.replace.height}"
            )

    def rotate_cw(self) -> Rule:
        return Rule(self.find.rotate_cw(), self.replace.rotate_cw())

    def make_rotations(self) -> list[Rule]:
        """The rule and its 90°, 180° and 270° clockwise turns."""
        cw = self.rotate_cw()
        turn = cw.rotate_cw()
        ccw = turn.rotate_cw()
        return [self, cw, turn, ccw]


@dataclass
class Grid(GenericGrid[Symbol]):
    """The mutable canvas rules are applied to."""

    @classmethod
    def new(cls, width: int, height: int) -> Grid:
        return cls(width, height, [Symbol.default()] * (width * height))

    def copy(self) -> Grid:
        return Grid(self.width, self.height, list(self.cells))

    def __str__(self) -> str:
        return "".join(
            "".join(symbol.value for symbol in row) + "\n" for row in self.rows()
        )
