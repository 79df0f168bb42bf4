"""
3' end structure risk classification.

A polymerase can only extend from a free 3' end, so a stable structure that
pairs the last bases of a primer is far more harmful than one elsewhere.
The classifier combines the fold energy with where the pairing sits to give
one of six tiers.

Rules, in order:

1. ``energy > -0.5``: no meaningful structure, tier ``none``.
2. Find whether a pair touches the 3' critical region through the stem, or
   whether only the hairpin loop reaches into it.
3. Plain energy band: ``> -1`` none, ``(-2, -1]`` low, ``(-3, -2]``
   moderate, ``(-4, -3]`` warning, ``<= -4`` critical.
4. Escalation: ``critical`` for a stem touch at ``<= -3``; ``warning`` for
   any 3' touch within ``[-4, -2]`` or any structure at ``<= -4``; ``info``
   for a 3' touch whose plain band is ``none``; otherwise the plain band.

Every threshold is inclusive on its severe side, so a value sitting exactly
on one (``-3.0`` say) joins the more severe tier.
"""

import math
from typing import Optional, Tuple

from loguru import logger

from ..core.parser import innermost_pair
from ..models import SeverityClassification, SeverityTier, as_base_pairs

NO_STRUCTURE_ENERGY = -0.5
CRITICAL_ENERGY = -3.0
WARNING_ENERGY = -2.0
SEVERE_ENERGY = -4.0

ENERGY_BANDS = (
    (-1.0, SeverityTier.NONE),
    (-2.0, SeverityTier.LOW),
    (-3.0, SeverityTier.MODERATE),
    (-4.0, SeverityTier.WARNING),
)

TIER_TEXT = {
    SeverityTier.NONE: (
        "No Significant Structure",
        "Free",
        "The 3' end is free and available for template binding.",
    ),
    SeverityTier.INFO: (
        "Weak 3' Structure",
        "Weak",
        "Weak structure near the 3' end; it typically melts at annealing temperature.",
    ),
    SeverityTier.LOW: (
        "Minor Structure",
        "Minor",
        "Minor structure detected; usually fine under normal PCR conditions.",
    ),
    SeverityTier.MODERATE: (
        "Moderate Structure",
        "Moderate",
        "Monitor PCR efficiency; optimize if yields are low.",
    ),
    SeverityTier.WARNING: (
        "3' Structure Risk",
        "Risk",
        "Structure may compete with template binding; try adjusting length by 1-2 bases, "
        "touchdown PCR, or 2-5% DMSO.",
    ),
    SeverityTier.CRITICAL: (
        "3' End Blocked",
        "Blocked",
        "Redesign: a free 3' end is required for polymerase extension.",
    ),
}


def clean_energy(energy) -> float:
    """Coerce ``energy`` to a float; None, NaN and junk become 0.0."""
    if energy is None:
        logger.warning("Missing fold energy, treating as 0.0")
        return 0.0
    try:
        value = float(energy)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric fold energy {energy!r}, treating as 0.0")
        return 0.0
    if math.isnan(value):
        logger.warning("NaN fold energy, treating as 0.0")
        return 0.0
    return value


def energy_band(energy: float) -> SeverityTier:
    """Plain energy band, ignoring where the structure sits."""
    for threshold, tier in ENERGY_BANDS:
        if energy > threshold:
            return tier
    return SeverityTier.CRITICAL


class RiskClassifier:
    """Maps energy, pairing and length to a 3' severity tier."""

    def __init__(self, critical_region: int = 10):
        self.critical_region = critical_region

    def region_start(self, sequence_length: int) -> int:
        return max(0, sequence_length - self.critical_region)

    def three_prime_contacts(self, base_pairs, sequence_length: int) -> Tuple[bool, bool]:
        """(stem touch, loop touch) for the 3' critical region.

        Malformed pair entries are logged and treated as no contact.
        """
        try:
            pairs = as_base_pairs(base_pairs)
        except (TypeError, ValueError, IndexError) as e:
            logger.warning(f"Malformed base pairs {base_pairs!r}, ignoring 3' contact: {e}")
            return False, False

        if not pairs or sequence_length <= 0:
            return False, False

        start = self.region_start(sequence_length)
        in_stem = any(pair.touches(start) for pair in pairs)

        inner = innermost_pair(sorted(pairs, key=lambda p: p.i))
        loop_start = inner.i + 1
        in_loop = inner.span > 1 and loop_start >= start

        return in_stem, in_loop

    def classify(
        self,
        energy: Optional[float],
        base_pairs,
        sequence_length: int,
    ) -> SeverityClassification:
        """Classify the structure; never raises on odd energies or malformed pairings."""
        energy = clean_energy(energy)

        if energy > NO_STRUCTURE_ENERGY:
            return self._result(SeverityTier.NONE, energy, False, False)

        in_stem, in_loop = self.three_prime_contacts(base_pairs, sequence_length)
        touches = in_stem or in_loop
        band = energy_band(energy)

        if in_stem and energy <= CRITICAL_ENERGY:
            tier = SeverityTier.CRITICAL
        elif (touches and SEVERE_ENERGY <= energy <= WARNING_ENERGY) or energy <= SEVERE_ENERGY:
            tier = SeverityTier.WARNING
        elif touches and band is SeverityTier.NONE:
            tier = SeverityTier.INFO
        else:
            tier = band

        return self._result(tier, energy, in_stem, in_loop)

    @staticmethod
    def _result(tier: SeverityTier, energy: float, in_stem: bool, in_loop: bool) -> SeverityClassification:
        label, short_label, message = TIER_TEXT[tier]
        return SeverityClassification(
            tier=tier,
            label=label,
            message=message,
            should_warn=tier not in (SeverityTier.NONE, SeverityTier.INFO),
            short_label=short_label,
            energy=energy,
            involves_3prime_stem=in_stem,
            involves_3prime_loop=in_loop,
        )


def classify(energy, base_pairs, sequence_length: int, critical_region: int = 10) -> SeverityClassification:
    """Module-level shortcut for ``RiskClassifier(critical_region).classify``."""
    return RiskClassifier(critical_region).classify(energy, base_pairs, sequence_length)
