from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, List

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling for maze generation
    - support optional deterministic seeding for tests and replays
    - never touch the global ``random`` state
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def shuffle(self, items: List[Any]) -> None:
        """Shuffle ``items`` in place (uniform Fisher-Yates)."""
        self._rng.shuffle(items)


__all__ = ["RandomSource"]
