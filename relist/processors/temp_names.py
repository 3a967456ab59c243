"""Collision-free placeholder names for breaking rename cycles."""

import logging
import random
from collections.abc import Callable, Collection
from pathlib import Path

from relist.errors import TempNameExhausted
from relist.processors.validator import lexists


logger = logging.getLogger(__name__)

TEMP_SUFFIX = "temp"

# Attempts before giving up on finding a free name
MAX_ATTEMPTS = 10


class TempNameGenerator:
    """Generates ``<base>.temp_<NNNN>`` paths that are free on disk and in the batch."""

    def __init__(
        self,
        reserved: Collection[Path] = (),
        exists: Callable[[Path], bool] = lexists,
        rng: random.Random | None = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        """Initialize the generator.

        Args:
            reserved: Paths named by the current batch (inputs and targets). These
                      are never returned even if they do not exist yet.
            exists: Filesystem existence check.
            rng: Random source, seeded in tests.
            max_attempts: Number of candidates tried before failing.
        """
        self.reserved = set(reserved)
        self.exists = exists
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def generate(self, base: Path) -> Path:
        """Return a free temporary path derived from ``base``.

        The returned path is also reserved, so later calls never hand it out again.

        Raises:
            TempNameExhausted: If every attempt collided.
        """
        for _ in range(self.max_attempts):
            candidate = Path(f"{base}.{TEMP_SUFFIX}_{self.rng.randint(0, 9999):04d}")
            if candidate in self.reserved or self.exists(candidate):
                logger.debug("Temporary name %s is taken", candidate)
                continue
            self.reserved.add(candidate)
            return candidate

        raise TempNameExhausted(str(base), self.max_attempts)
