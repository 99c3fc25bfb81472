"""
Interactive demo for markovgrid.
Display a model's grid and advance it tick by tick with keyboard commands.
"""

from __future__ import annotations

import logging
import random
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from demo import MODELS
from grid_types import Grid
from markovgrid import AnyNode, AnyState, make_state, step

FAST_FORWARD_STEPS = 64


class InteractiveDemo:
    """Step a model interactively."""

    def __init__(self, model: AnyNode, grid: Grid, seed: int = 0) -> None:
        self.model = model
        self.original_grid = grid.copy()  # Keep a copy of the starting state
        self.seed = seed
        self.console = Console()
        self.reset()

    def reset(self) -> None:
        """Fresh grid, state and generator from the same model and seed."""
        self.grid = self.original_grid.copy()
        self.state: AnyState = make_state(self.model)
        self.rng = random.Random(self.seed)
        self.steps = 0
        self.done = False
        self.status_message = "Ready"

    def advance(self, count: int) -> None:
        """Tick up to `count` times, stopping early when nothing changes."""
        if self.done:
            self.status_message = "✗ Model has finished"
            return

        taken = 0
        while taken < count:
            if not step(self.state, self.rng, self.grid):
                self.done = True
                break
            taken += 1

        self.steps += taken
        if self.done:
            self.status_message = f"✓ Finished after {self.steps} steps"
        else:
            self.status_message = f"✓ Took {taken} step{'s' if taken != 1 else ''}"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        status = Text()
        status.append("Steps: ", style="bold")
        status.append(f"{self.steps}\n\n")

        status.append(Text.from_ansi(render(self.grid)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  Space - One step\n")
        status.append(f"  F - {FAST_FORWARD_STEPS} steps\n")
        status.append("  R - Reset\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="markovgrid Interactive Demo", border_style="green")

    def run(self) -> None:
        """Run the interactive loop until the user quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == 'r':
                        self.reset()
                        self.status_message = "Reset to starting state"
                    elif key == ' ':
                        self.advance(1)
                    elif key.lower() == 'f':
                        self.advance(FAST_FORWARD_STEPS)
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    name = sys.argv[1] if len(sys.argv) > 1 else 'maze'
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else 0
    model, grid = MODELS[name]()
    InteractiveDemo(model, grid, seed).run()
