"""Base-pair validation and stem/loop decomposition."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from loguru import logger

from ..exceptions import InvalidPairingError
from ..models import BasePair, BulgeRun, StructureDecomposition, as_base_pairs


def innermost_pair(sorted_pairs: Sequence[BasePair]) -> BasePair:
    """Pair with the smallest span; ties go to the largest left index."""
    return min(sorted_pairs, key=lambda p: (p.span, -p.i))


class StructureParser:
    """Derives a StructureDecomposition from a validated pairing."""

    def __init__(self, sequence: str):
        self.sequence = sequence

    def validate(self, pairs: Iterable[BasePair]) -> Tuple[BasePair, ...]:
        """Check that ``pairs`` is an in-range matching without self-pairs."""
        n = len(self.sequence)
        seen = {}

        for pair in pairs:
            if pair.i == pair.j:
                raise InvalidPairingError("base cannot pair with itself", pair=pair.as_tuple())

            for index in pair.as_tuple():
                if index < 0 or index >= n:
                    raise InvalidPairingError(
                        f"index out of range for sequence of length {n}",
                        pair=pair.as_tuple(),
                        index=index,
                    )
                if index in seen:
                    raise InvalidPairingError(
                        f"index already paired in {seen[index].as_tuple()}",
                        pair=pair.as_tuple(),
                        index=index,
                    )
                seen[index] = pair

        return tuple(pairs)

    def decompose(self, base_pairs) -> StructureDecomposition | None:
        """Validate ``base_pairs`` and break the structure into stem levels.

        Returns None for an empty pairing so callers can fall back to the
        linear layout.
        """
        pairs = self.validate(as_base_pairs(base_pairs))
        if not pairs:
            return None

        n = len(self.sequence)
        stem_pairs = tuple(sorted(pairs, key=lambda p: p.i))
        inner = innermost_pair(stem_pairs)
        paired = {index for pair in stem_pairs for index in pair.as_tuple()}

        first_paired = stem_pairs[0].i
        last_paired = max(pair.j for pair in stem_pairs)

        bulges: List[BulgeRun] = []
        for level, (outer, upper) in enumerate(zip(stem_pairs, stem_pairs[1:])):
            left = tuple(k for k in range(outer.i + 1, upper.i) if k not in paired)
            right = tuple(k for k in range(upper.j + 1, outer.j) if k not in paired)
            bulges.append(BulgeRun(level=level, left_indices=left, right_indices=right))

        decomposition = StructureDecomposition(
            sequence_length=n,
            stem_pairs=stem_pairs,
            inner_pair=inner,
            loop_region=(inner.i + 1, inner.j - 1),
            tail5_len=first_paired,
            tail3_len=(n - 1) - last_paired,
            bulges=tuple(bulges),
        )

        logger.debug(
            f"Decomposed {len(stem_pairs)} pairs: inner={inner.as_tuple()} "
            f"loop_len={decomposition.loop_len} segments={decomposition.segment_heights}"
        )
        return decomposition


def decompose(sequence: str, base_pairs) -> StructureDecomposition | None:
    """Module-level shortcut for ``StructureParser(sequence).decompose``."""
    return StructureParser(sequence).decompose(base_pairs)


def pairs_from_dot_bracket(structure: str) -> Tuple[BasePair, ...]:
    """Parse dot-bracket notation into base pairs."""
    stack: List[int] = []
    pairs: List[BasePair] = []

    for index, char in enumerate(structure):
        if char == '(':
            stack.append(index)
        elif char == ')':
            if not stack:
                raise InvalidPairingError("unmatched ')'", index=index)
            pairs.append(BasePair(stack.pop(), index))
        elif char not in '.-,:_':
            raise InvalidPairingError(f"unexpected character {char!r}", index=index)

    if stack:
        raise InvalidPairingError("unmatched '('", index=stack[-1])

    return tuple(sorted(pairs, key=lambda p: p.i))


def to_dot_bracket(sequence_length: int, base_pairs) -> str:
    """Render base pairs as dot-bracket notation, skipping out-of-range pairs."""
    structure = ['.'] * sequence_length

    for pair in sorted(as_base_pairs(base_pairs), key=lambda p: p.i):
        if 0 <= pair.i < pair.j < sequence_length:
            structure[pair.i] = '('
            structure[pair.j] = ')'

    return ''.join(structure)
