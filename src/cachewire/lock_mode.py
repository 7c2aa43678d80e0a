from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for first resolution in the reference container.

    The first ``resolve`` of a key instantiates the dependency and runs its
    extension chain. ``THREAD`` guarantees the chain runs once even when
    several threads race on that first resolution.
    """

    THREAD = "thread"
    """Guard first resolution with ``threading.Lock``."""

    NONE = "none"
    """Disable locking around first resolution."""
