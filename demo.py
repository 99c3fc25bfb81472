"""
Demonstration models for the markovgrid interpreter.

Usage:
    python demo.py [maze|river] [seed]
"""

from __future__ import annotations

import logging
import random
import sys
from typing import Callable

from ascii_render import render
from grid_types import Grid, Point, Symbol
from markovgrid import (
    AllNode,
    AnyNode,
    MarkovNode,
    OneNode,
    RunSettings,
    SequenceNode,
    rotated,
    run,
)
from pattern_parser import parse_rule

logger = logging.getLogger(__name__)


def maze_backtracker() -> tuple[AnyNode, Grid]:
    """Recursive-backtracker maze on a 16x16 grid from a single red seed."""
    grid = Grid.new(16, 16)
    grid[Point(50 % 16, 50 // 16)] = Symbol.RED

    model = MarkovNode(
        [
            OneNode(rotated([parse_rule("RBB", "GGR")])),
            OneNode(rotated([parse_rule("RGG", "WWR")])),
        ]
    )
    return model, grid


def river(size: int = 48) -> tuple[AnyNode, Grid]:
    """Two growing regions whose border becomes a river, then banks and forest."""
    grid = Grid.new(size, size)

    model = SequenceNode(
        [
            OneNode([parse_rule("B", "W")], steps=1),
            OneNode([parse_rule("B", "R")], steps=1),
            OneNode(rotated([parse_rule("RB", "RR"), parse_rule("WB", "WW")])),
            AllNode(rotated([parse_rule("RW", "UU")])),
            AllNode(rotated([parse_rule("W", "B"), parse_rule("R", "B")])),
            AllNode(rotated([parse_rule("UB", "UU")]), steps=1),
            AllNode(rotated([parse_rule("BU/UB", "U*/**")])),
            AllNode(rotated([parse_rule("UB", "*G")])),
            OneNode([parse_rule("B", "E")], steps=13),
            OneNode(rotated([parse_rule("EB", "*E"), parse_rule("GB", "*G")])),
        ]
    )
    return model, grid


MODELS: dict[str, Callable[[], tuple[AnyNode, Grid]]] = dict(
    maze=maze_backtracker,
    river=river,
)


def main(name: str, seed: int) -> None:
    """Run a model to completion and print the final grid."""
    model, grid = MODELS[name]()
    rng = random.Random(seed)
    logger.info("running %s (%dx%d, seed %d)", name, grid.width, grid.height, seed)

    result = run(model, rng, grid, RunSettings(log_every=500))
    print(render(grid))
    print()
    print(f"{name}: {result.steps} steps (seed {seed})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    name = sys.argv[1] if len(sys.argv) > 1 else 'maze'
    if name not in MODELS:
        print(f"Unknown model '{name}', choose from: {', '.join(MODELS)}")
        sys.exit(1)
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else 0
    main(name, seed)
