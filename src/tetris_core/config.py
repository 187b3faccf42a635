"""Session configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .game_state import QUEUE_SIZE
from .timing import LONG_TICK, TICK_MS


@dataclass(frozen=True)
class SessionConfig:
    """Tunables for a :class:`~tetris_core.session.Session`.

    ``tick_ms`` is only advisory for drivers; the engine itself counts ticks
    and never reads a clock.
    """

    tick_ms: int = TICK_MS
    long_tick: int = LONG_TICK
    queue_size: int = QUEUE_SIZE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.long_tick <= 0:
            raise ValueError(f"long_tick must be positive, got {self.long_tick}")
        if self.queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {self.queue_size}")

    @property
    def gravity_interval_ms(self) -> int:
        """Wall-clock time between two gravity steps."""

        return self.tick_ms * self.long_tick

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SessionConfig":
        """Build a config from ``TETRIS_*`` environment variables.

        Recognised variables are ``TETRIS_SEED``, ``TETRIS_TICK_MS`` and
        ``TETRIS_LONG_TICK``.  Missing ones keep their defaults.

        Raises:
            ValueError: If a variable is not an integer or out of range.
        """

        env = os.environ if environ is None else environ

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"{name} must be an integer, got {raw!r}") from None

        return cls(
            tick_ms=_int("TETRIS_TICK_MS", TICK_MS),
            long_tick=_int("TETRIS_LONG_TICK", LONG_TICK),
            seed=_int("TETRIS_SEED", None),
        )
