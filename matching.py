"""
Pattern matching and mutation against a Grid.

Candidate origins are every position where the pattern fits inside the grid:
0 <= x <= grid.width - pattern.width and 0 <= y <= grid.height - pattern.height.
Scanning is x outer, y inner; match lists come back in that order.
"""

from __future__ import annotations

from typing import Sequence

from grid_types import Grid, OutOfBoundsError, Pattern, Point, Rule

# (rule index, origin) pair produced by collect_matches
Match = tuple[int, Point]


def assert_pattern_fit(grid: Grid, pattern: Pattern, at: Point) -> None:
    """Raise OutOfBoundsError unless the pattern placed at `at` lies inside the grid."""
    if (
        at.x < 0
        or at.y < 0
        or pattern.width + at.x > grid.width
        or pattern.height + at.y > grid.height
    ):
        raise OutOfBoundsError(
            f"{pattern.width}x{pattern.height} pattern at {at} is out-of-bounds "
            f"for {grid.width}x{grid.height} grid"
        )


def test_match(grid: Grid, pattern: Pattern, at: Point) -> bool:
    """True if every non-wildcard pattern cell equals the grid cell under it."""
    assert_pattern_fit(grid, pattern, at)

    for x in range(pattern.width):
        for y in range(pattern.height):
            expected = pattern.cells[y * pattern.width + x]
            if expected is not None and grid.cells[(y + at.y) * grid.width + x + at.x] != expected:
                return False

    return True


def apply_pattern(grid: Grid, pattern: Pattern, at: Point) -> None:
    """Write every non-wildcard pattern cell into the grid at offset `at`."""
    assert_pattern_fit(grid, pattern, at)

    for x in range(pattern.width):
        for y in range(pattern.height):
            new_symbol = pattern.cells[y * pattern.width + x]
            if new_symbol is not None:
                grid.cells[(y + at.y) * grid.width + x + at.x] = new_symbol


def find_matches(grid: Grid, pattern: Pattern) -> list[Point]:
    """All origins where the pattern matches."""
    assert_pattern_fit(grid, pattern, Point.ZERO)

    found: list[Point] = []
    for x in range(grid.width - pattern.width + 1):
        for y in range(grid.height - pattern.height + 1):
            at = Point(x, y)
            if test_match(grid, pattern, at):
                found.append(at)

    return found


def collect_matches(grid: Grid, rules: Sequence[Rule]) -> list[Match]:
    """Every (rule_index, origin) match over all rules, in rule order."""
    matched: list[Match] = []
    for idx, rule in enumerate(rules):
        for at in find_matches(grid, rule.find):
            matched.append((idx, at))
    return matched
