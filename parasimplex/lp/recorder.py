"""Fixed-capacity accumulator for path breakpoints."""

from __future__ import annotations

from typing import List

import numpy as np

from .core import Path, PathEntry


class PathRecorder:
    """
    Collect :class:`PathEntry` snapshots up to a fixed capacity.

    ``append`` returns False once the recorder is full; the entry is dropped
    and the caller is expected to stop producing breakpoints.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}.")
        self.capacity = int(capacity)
        self._entries: List[PathEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PathRecorder({len(self)}/{self.capacity})"

    @property
    def full(self) -> bool:
        return len(self._entries) >= self.capacity

    @property
    def last_lambda(self) -> float:
        """``lam`` of the latest entry, ``+inf`` while the recorder is empty."""
        if not self._entries:
            return np.inf
        return self._entries[-1].lam

    def append(self, lam: float, x: np.ndarray, y: np.ndarray) -> bool:
        if self.full:
            return False
        lam = float(lam)
        if not lam < self.last_lambda:
            raise ValueError(
                f"breakpoints must strictly decrease, got {lam} after {self.last_lambda}"
            )
        x = np.array(x, dtype=float)
        y = np.array(y, dtype=float)
        x.setflags(write=False)
        y.setflags(write=False)
        self._entries.append(PathEntry(lam=lam, x=x, y=y))
        return True

    def path(self) -> Path:
        return Path(self._entries)


__all__ = ["PathRecorder"]
