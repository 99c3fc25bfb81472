"""
Node/state interpreter for grid rewriting programs.

A program is an immutable tree of nodes (Markov, Sequence, One, All, Prl).
make_state() derives a parallel tree of mutable states, and step() advances
that state tree by one tick against a grid:

    state = make_state(program)
    while step(state, rng, grid):
        ...  # observe grid between ticks
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

from grid_types import Grid, Rule
from matching import apply_pattern, collect_matches, test_match

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures: Program Nodes
# =============================================================================


def _check_steps(steps: int | None) -> None:
    if steps is not None and steps < 0:
        raise ValueError(f"steps limit must be None or >= 0, got {steps}")


@dataclass(frozen=True)
class MarkovNode:
    """Run the first child that can make progress; priority resets every tick."""

    children: tuple[AnyNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class SequenceNode:
    """Run each child until it stops making progress, then move to the next."""

    children: tuple[AnyNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class OneNode:
    """Apply one randomly chosen match per tick, at most `steps` times."""

    rules: tuple[Rule, ...]
    steps: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        _check_steps(self.steps)


@dataclass(frozen=True)
class AllNode:
    """Apply every non-conflicting match per tick, at most `steps` times."""

    rules: tuple[Rule, ...]
    steps: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        _check_steps(self.steps)


@dataclass(frozen=True)
class PrlNode:
    """Apply every match per tick without re-testing; later writes win."""

    rules: tuple[Rule, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))


AnyNode = Union[MarkovNode, SequenceNode, OneNode, AllNode, PrlNode]

_NODE_TYPES = (MarkovNode, SequenceNode, OneNode, AllNode, PrlNode)


def rotated(rules: Sequence[Rule]) -> list[Rule]:
    """Rotation-closure of a rule list: each rule followed by its three turns."""
    return [variant for rule in rules for variant in rule.make_rotations()]


# =============================================================================
# Data Structures: Execution State
# =============================================================================


@dataclass
class MarkovState:
    children: list[AnyState]


@dataclass
class SequenceState:
    children: list[AnyState]
    index: int = 0


@dataclass
class OneState:
    node: OneNode
    steps_taken: int = 0


@dataclass
class AllState:
    node: AllNode
    steps_taken: int = 0


@dataclass
class PrlState:
    node: PrlNode


AnyState = Union[MarkovState, SequenceState, OneState, AllState, PrlState]


def make_state(node: AnyNode) -> AnyState:
    """Build a fresh state tree for a node tree. No randomness, no grid access."""
    match node:
        case MarkovNode(children=children):
            return MarkovState([make_state(child) for child in children])
        case SequenceNode(children=children):
            return SequenceState([make_state(child) for child in children])
        case OneNode():
            return OneState(node)
        case AllNode():
            return AllState(node)
        case PrlNode():
            return PrlState(node)
        case _:
            raise TypeError(f"Unknown node type: {node!r}")


# =============================================================================
# Stepping
# =============================================================================


def _limit_reached(steps_taken: int, limit: int | None) -> bool:
    return limit is not None and steps_taken >= limit


def _step_one(state: OneState, rng: random.Random, grid: Grid) -> bool:
    if _limit_reached(state.steps_taken, state.node.steps):
        return False

    matched = collect_matches(grid, state.node.rules)
    if not matched:
        return False

    idx, at = rng.choice(matched)
    apply_pattern(grid, state.node.rules[idx].replace, at)
    state.steps_taken += 1
    logger.debug("one: rule %d applied at %s (%d candidates)", idx, at, len(matched))
    return True


def _step_all(state: AllState, rng: random.Random, grid: Grid) -> bool:
    if _limit_reached(state.steps_taken, state.node.steps):
        return False

    matched = collect_matches(grid, state.node.rules)
    if not matched:
        return False

    rng.shuffle(matched)

    applied = 0
    for idx, at in matched:
        rule = state.node.rules[idx]
        # An earlier write in this batch may have invalidated this match
        if test_match(grid, rule.find, at):
            apply_pattern(grid, rule.replace, at)
            applied += 1

    state.steps_taken += 1
    logger.debug("all: applied %d of %d matches", applied, len(matched))
    return True


def _step_prl(state: PrlState, rng: random.Random, grid: Grid) -> bool:
    matched = collect_matches(grid, state.node.rules)
    if not matched:
        return False

    rng.shuffle(matched)

    for idx, at in matched:
        apply_pattern(grid, state.node.rules[idx].replace, at)

    logger.debug("prl: applied %d matches", len(matched))
    return True


def _step_sequence(state: SequenceState, rng: random.Random, grid: Grid) -> bool:
    while state.index < len(state.children):
        if step(state.children[state.index], rng, grid):
            return True
        state.index += 1
        logger.debug("sequence: advanced to child %d", state.index)

    return False


def _step_markov(state: MarkovState, rng: random.Random, grid: Grid) -> bool:
    for child in state.children:
        if step(child, rng, grid):
            return True

    return False


def step(state: AnyState, rng: random.Random, grid: Grid) -> bool:
    """
    Perform a single tick.

    Returns True if a rewrite was performed, i.e. calling step again may make
    further progress. False means the node has nothing to do right now.
    """
    match state:
        case MarkovState():
            return _step_markov(state, rng, grid)
        case SequenceState():
            return _step_sequence(state, rng, grid)
        case OneState():
            return _step_one(state, rng, grid)
        case AllState():
            return _step_all(state, rng, grid)
        case PrlState():
            return _step_prl(state, rng, grid)
        case _:
            raise TypeError(f"Unknown state type: {state!r}")


# =============================================================================
# Driving
# =============================================================================


@dataclass(frozen=True)
class RunSettings:
    """Options for iter_steps() and run()."""

    max_steps: int | None = None  # None = run until no node makes progress
    log_every: int = 0  # Emit an INFO progress record every N ticks (0 = never)

    def __post_init__(self) -> None:
        _check_steps(self.max_steps)
        if self.log_every < 0:
            raise ValueError(f"log_every must be >= 0, got {self.log_every}")


@dataclass(frozen=True)
class RunResult:
    """Outcome of run()."""

    steps: int
    finished: bool  # False when max_steps was reached, even on a final tick


def iter_steps(
    state: AnyState,
    rng: random.Random,
    grid: Grid,
    settings: RunSettings = RunSettings(),
) -> Iterator[int]:
    """
    Tick the state until it stops making progress, yielding the tick count
    after each successful tick. The grid can be inspected between yields.
    """
    count = 0
    while settings.max_steps is None or count < settings.max_steps:
        if not step(state, rng, grid):
            return
        count += 1
        if settings.log_every and count % settings.log_every == 0:
            logger.info("run: %d steps", count)
        yield count


def run(
    program: AnyNode | AnyState,
    rng: random.Random,
    grid: Grid,
    settings: RunSettings = RunSettings(),
) -> RunResult:
    """
    Drive a program (or an existing state tree) to completion.

    Stops when no node makes progress, or when settings.max_steps ticks have
    been taken, whichever comes first.
    """
    state = make_state(program) if isinstance(program, _NODE_TYPES) else program

    steps = 0
    for steps in iter_steps(state, rng, grid, settings):
        pass

    finished = settings.max_steps is None or steps < settings.max_steps
    if not finished:
        logger.warning("run: stopped at step limit %d", steps)
    logger.info("run: %s after %d steps", "finished" if finished else "halted", steps)
    return RunResult(steps, finished)

