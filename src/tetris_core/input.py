"""Key debouncing.

Raw key transitions from a front-end are folded into a three state lifecycle
per tracked key so that one physical press produces exactly one action, while
the operating system's key repeat re-arms a held key at its own cadence.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Hashable, Iterable, List, Set


class KeyState(Enum):
    NOT_PRESSED = "not_pressed"
    PRESSED = "pressed"
    DONE = "done"


class InputDebouncer:
    """Track press state for a fixed, ordered set of keys.

    ``keys`` fixes the order in which simultaneously pressed keys are
    reported by :meth:`consume`.  Keys outside that set are ignored.
    """

    def __init__(self, keys: Iterable[Hashable]) -> None:
        self._order = tuple(keys)
        self._states: Dict[Hashable, KeyState] = {k: KeyState.NOT_PRESSED for k in self._order}
        # Keys released before their press was consumed.
        self._released: Set[Hashable] = set()

    def state(self, key: Hashable) -> KeyState:
        return self._states[key]

    def key_down(self, key: Hashable, repeat: bool = False) -> None:
        """Record a key-down event.

        A fresh press arms the key.  An auto-repeat event only re-arms a key
        whose previous press has already been consumed.
        """

        current = self._states.get(key)
        if current is None:
            return
        if repeat and current is not KeyState.DONE:
            return
        self._states[key] = KeyState.PRESSED
        self._released.discard(key)

    def key_up(self, key: Hashable) -> None:
        """Record a key-up event.

        A press that has not been consumed yet still fires once on the next
        :meth:`consume`.
        """

        current = self._states.get(key)
        if current is None:
            return
        if current is KeyState.PRESSED:
            self._released.add(key)
        else:
            self._states[key] = KeyState.NOT_PRESSED

    def consume(self) -> List[Hashable]:
        """Return the armed keys in tracking order and mark them handled."""

        fired = [k for k in self._order if self._states[k] is KeyState.PRESSED]
        for key in fired:
            if key in self._released:
                self._released.discard(key)
                self._states[key] = KeyState.NOT_PRESSED
            else:
                self._states[key] = KeyState.DONE
        return fired

    def reset(self) -> None:
        """Forget all key state."""

        for key in self._order:
            self._states[key] = KeyState.NOT_PRESSED
        self._released.clear()
