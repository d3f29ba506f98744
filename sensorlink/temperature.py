"""Simulated on-chip temperature sensor."""

from __future__ import annotations

import random

_READING_SPAN = 35


class TemperatureSensor:
    """Temperature source that yields pseudo-random readings in degrees Celsius.

    Readings are integers in the range ``0`` to ``34`` inclusive and are
    reproducible for a given seed.
    """

    def __init__(self, seed: int | None = 0) -> None:
        self._random = random.Random(seed)

    def read(self) -> int:
        """Return the next temperature reading."""
        return self._random.randrange(_READING_SPAN)