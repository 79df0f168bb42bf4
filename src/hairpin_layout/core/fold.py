"""Folding oracle adapter and result cache."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable, Mapping

from loguru import logger

from ..exceptions import FoldError
from ..models import FoldResult

FoldOracle = Callable[[str, float], Any]

MIN_FOLD_LENGTH = 6
DEFAULT_CACHE_SIZE = 256


def consolidate(sequence: str, structures) -> FoldResult:
    """Merge a list of oracle sub-structures into one FoldResult.

    Energies are summed, pairs concatenated. Entries that point outside the
    sequence or at the same index are inner-structure pointers and are dropped.
    """
    if not structures:
        return FoldResult.empty()

    total_energy = 0.0
    pairs = []
    descriptors = []

    for data in structures:
        part = FoldResult.from_dict(data)
        total_energy += part.energy
        if part.descriptor:
            descriptors.append(part.descriptor)
        for pair in part.base_pairs:
            if pair.j < len(sequence) and pair.i != pair.j:
                pairs.append(pair)

    descriptor = descriptors[0].split(':')[0] if descriptors else ""
    return FoldResult(
        energy=round(total_energy, 2),
        base_pairs=tuple(pairs),
        descriptor=descriptor,
    )


def resolve_fold(
    sequence: str,
    temperature: float,
    oracle: FoldOracle,
    min_length: int = MIN_FOLD_LENGTH,
) -> FoldResult:
    """Run ``oracle`` on ``sequence``, falling back to ``FoldResult.empty()``.

    Sequences shorter than ``min_length`` never reach the oracle. Oracle
    exceptions and malformed output are logged and replaced by the default.
    """
    if not sequence or len(sequence) < min_length:
        return FoldResult.empty()

    try:
        raw = oracle(sequence, temperature)
        if raw is None:
            raise FoldError("oracle returned nothing", sequence=sequence)
        if isinstance(raw, FoldResult):
            return raw
        if isinstance(raw, Mapping):
            return FoldResult.from_dict(raw)
        return consolidate(sequence, list(raw))
    except Exception as e:
        logger.warning(f"Fold computation failed for {sequence}: {e}")
        return FoldResult.empty()


class FoldCache:
    """Memoises oracle results keyed on (sequence, temperature).

    Backed by ``functools.lru_cache``; the least recently used entry is
    evicted once ``maxsize`` results are held.
    """

    def __init__(
        self,
        oracle: FoldOracle,
        min_length: int = MIN_FOLD_LENGTH,
        maxsize: int = DEFAULT_CACHE_SIZE,
    ):
        self.oracle = oracle
        self.min_length = min_length
        self.maxsize = maxsize
        self._resolve = lru_cache(maxsize=maxsize)(self._fold)

    def _fold(self, sequence: str, temperature: float) -> FoldResult:
        return resolve_fold(sequence, temperature, self.oracle, self.min_length)

    def get(self, sequence: str, temperature: float) -> FoldResult:
        return self._resolve(sequence, float(temperature))

    def info(self):
        """``functools`` cache statistics (hits, misses, maxsize, currsize)."""
        return self._resolve.cache_info()

    def clear(self) -> None:
        self._resolve.cache_clear()

    def __len__(self) -> int:
        return self._resolve.cache_info().currsize
