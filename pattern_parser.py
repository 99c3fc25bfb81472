"""
Pattern and grid literal parsing for markovgrid.

Provides the textual literal forms:
1. A single row of symbol characters ("RBB", "U*")
2. A multi-row pattern with rows separated by '/' ("BU/UB")
3. A grid literal with no wildcards, rows separated by '/' or newlines
"""

from __future__ import annotations

from grid_types import Grid, Pattern, PatternFormatError, Rule, Symbol

__all__ = [
    "WILDCARD",
    "parse_symbols",
    "parse_pattern",
    "parse_rule",
    "parse_rotations",
    "parse_grid",
]

WILDCARD = "*"
ROW_SEPARATOR = "/"


def parse_symbols(text: str) -> list[Symbol | None]:
    """
    Parse one row of a pattern literal.

    Characters B, W, R, G, U and E map to the six symbols; '*' is a wildcard
    (None). Anything else is a format error.
    """
    row: list[Symbol | None] = []
    for col_idx, char in enumerate(text):
        if char == WILDCARD:
            row.append(None)
            continue
        try:
            row.append(Symbol.from_char(char))
        except PatternFormatError:
            valid = ", ".join(symbol.value for symbol in Symbol)
            raise PatternFormatError(
                f"Invalid character: '{char}'\n"
                f"  Row: \"{text}\"\n"
                f"  Position: column {col_idx}\n"
                f"  Valid characters: {valid} and '{WILDCARD}' for a wildcard"
            ) from None
    return row


def _parse_rows(text: str, row_strings: list[str]) -> list[list[Symbol | None]]:
    rows = [parse_symbols(row_str) for row_str in row_strings]

    if not rows or not rows[0]:
        raise PatternFormatError(f"Empty pattern: \"{text}\"")

    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in \"{text}\"\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise PatternFormatError(error_msg)

    return rows


def parse_pattern(text: str) -> Pattern:
    """
    Parse a pattern literal.

    Format:
    - Rows separated by /
    - One character per cell, see parse_symbols

    Example:
        "BU/UB" -> 2x2 pattern [[BLACK, BLUE], [BLUE, BLACK]]
        "U*/**" -> 2x2 pattern with only the top-left cell set
    """
    row_strings = text.split(ROW_SEPARATOR)
    rows = _parse_rows(text, row_strings)
    cells = [cell for row in rows for cell in row]
    return Pattern(len(rows[0]), len(rows), cells)


def parse_rule(find: str, replace: str) -> Rule:
    """Parse a find/replace pair; mismatched shapes raise ShapeMismatchError."""
    return Rule(parse_pattern(find), parse_pattern(replace))


def parse_rotations(find: str, replace: str) -> list[Rule]:
    """Parse a rule and expand it to its four rotations."""
    return parse_rule(find, replace).make_rotations()


def parse_grid(text: str) -> Grid:
    """
    Parse a grid literal.

    Rows are separated by '/' or by newlines; blank lines and surrounding
    whitespace are ignored, so a triple-quoted block works:

        parse_grid('''
            BBB
            BRB
        ''')

    Wildcards are not allowed in a grid.
    """
    row_strings = [
        line.strip()
        for chunk in text.strip().splitlines()
        for line in chunk.split(ROW_SEPARATOR)
        if line.strip()
    ]
    rows = _parse_rows(text, row_strings)

    cells: list[Symbol] = []
    for row_idx, row in enumerate(rows):
        for col_idx, cell in enumerate(row):
            if cell is None:
                raise PatternFormatError(
                    f"Wildcard in grid literal\n"
                    f"  Row {row_idx}: \"{row_strings[row_idx]}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Grid cells must hold a concrete symbol"
                )
            cells.append(cell)

    return Grid(len(rows[0]), len(rows), cells)
