"""Bounded example selection for report groups."""

from __future__ import annotations

import random
from collections.abc import Sequence

from infomodels.constants.config import DEFAULT_SAMPLE_SIZE
from infomodels.model import ValidationError


class Sampler:
    """Selects at most ``bound`` representative errors from a group.

    Groups smaller than the bound are returned whole and in order. Larger
    groups yield exactly ``bound`` picks: distinct instances in encounter
    order by default, or independent uniform draws (duplicates possible)
    when ``with_replacement`` is set.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        bound: int = DEFAULT_SAMPLE_SIZE,
        with_replacement: bool = False,
    ) -> None:
        if bound < 1:
            raise ValueError(f"sample bound must be positive, got {bound}")
        self._rng = rng if rng is not None else random.Random()
        self._bound = bound
        self._with_replacement = with_replacement

    @property
    def bound(self) -> int:
        return self._bound

    def sample(self, instances: Sequence[ValidationError], bound: int | None = None) -> list[ValidationError]:
        """Return the display sample for ``instances``."""
        limit = self._bound if bound is None else bound
        total = len(instances)
        if total < limit:
            return list(instances)

        if self._with_replacement:
            return [instances[self._rng.randrange(total)] for _ in range(limit)]

        picked = sorted(self._rng.sample(range(total), limit))
        return [instances[index] for index in picked]
