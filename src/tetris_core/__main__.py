"""Simple ASCII demo for the Tetris engine.

Run with: `python -m tetris_core`

This module prints a single frame composed of the board plus the active
tetromino, useful as a minimal smoke test to ensure renderers see more than a
blank grid.  ``--ticks`` advances the session before printing.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from .config import SessionConfig
from .session import Session


def format_frame(session: Session) -> List[str]:
    snap = session.snapshot()
    lines = ["".join("#" if cell else "." for cell in row) for row in session.render_grid()]
    lines.append(f"Score: {snap.score}  Lines: {snap.lines}  State: {snap.state.value}")
    lines.append("Next: " + " ".join(t.value for t in snap.queue))
    lines.append(f"Hold: {snap.held.value}")
    return lines


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print one frame of a Tetris session.")
    parser.add_argument("--ticks", type=int, default=0, help="Ticks to advance before printing.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator.")
    parser.add_argument("--verbose", action="store_true", help="Log session events.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    session = Session(SessionConfig(seed=args.seed))
    for _ in range(max(0, args.ticks)):
        session.tick()
    for line in format_frame(session):
        print(line)


if __name__ == "__main__":
    main()
