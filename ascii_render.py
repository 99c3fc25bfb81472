"""
ASCII rendering for markovgrid grids and patterns.

Cells are drawn as their symbol letter, optionally coloured per symbol with
ANSI codes.
"""

from __future__ import annotations

from typing import Callable

from simple_chalk import chalk  # type: ignore[import-untyped]

from grid_types import Grid, Pattern, Symbol
from pattern_parser import WILDCARD

# Colour for each symbol's letter
SYMBOL_COLORS: dict[Symbol, Callable[[str], str]] = {
    Symbol.BLACK: chalk.blackBright,
    Symbol.WHITE: chalk.whiteBright,
    Symbol.RED: chalk.red,
    Symbol.GREEN: chalk.greenBright,
    Symbol.BLUE: chalk.blueBright,
    Symbol.EMERALD: chalk.green,
}


def to_text(grid: Grid) -> str:
    """Plain letters, one newline-terminated line per row."""
    return str(grid)


def render(grid: Grid, colored: bool = True) -> str:
    """
    Render a grid to a string, one line per row.

    Args:
        grid: The grid to render
        colored: Colour each letter by symbol (default True)

    Returns:
        Rendered string, with ANSI colour codes when colored is set
    """
    lines = []
    for row in grid.rows():
        if colored:
            lines.append("".join(SYMBOL_COLORS[symbol](symbol.value) for symbol in row))
        else:
            lines.append("".join(symbol.value for symbol in row))
    return "\n".join(lines)


def render_pattern(pattern: Pattern) -> str:
    """Render a pattern with '*' for wildcard cells."""
    return "\n".join(
        "".join(WILDCARD if cell is None else cell.value for cell in row)
        for row in pattern.rows()
    )
