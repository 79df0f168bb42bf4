"""3' end risk classification for the hairpin layout engine."""

from .classifier import RiskClassifier, classify, energy_band

__all__ = [
    "RiskClassifier",
    "classify",
    "energy_band",
]
