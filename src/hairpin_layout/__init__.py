"""Hairpin layout engine.

Deterministic 2D layout and 3' end risk classification for primer
secondary structures. Folding itself is delegated to an external oracle;
this package turns its base pairs into diagram coordinates and a severity
tier for the primer's 3' end.
"""

__version__ = "1.0.0"

from .config import LayoutConfig
from .exceptions import ConfigurationError, FoldError, HairpinLayoutError, InvalidPairingError
from .models import (
    ArcSegment, BasePair, Bounds, BulgeRun, FoldResult, LayoutMode, LayoutNode,
    LayoutResult, SeverityClassification, SeverityTier, StructureDecomposition, StructureReport,
)
from .core import (
    StructureParser, decompose, pairs_from_dot_bracket, to_dot_bracket,
    FoldCache, resolve_fold,
)
from .layout import (
    ClassicHairpinLayout, FlatArcLayout, LayoutEngine, ModeSelector,
    backbone_path, compute_layout, linear_layout, view_box,
)
from .risk import RiskClassifier, classify, energy_band
from .main import analyze, analyze_with_oracle

__all__ = [
    "__version__",
    "LayoutConfig",
    "ConfigurationError",
    "FoldError",
    "HairpinLayoutError",
    "InvalidPairingError",
    "ArcSegment",
    "BasePair",
    "Bounds",
    "BulgeRun",
    "FoldResult",
    "LayoutMode",
    "LayoutNode",
    "LayoutResult",
    "SeverityClassification",
    "SeverityTier",
    "StructureDecomposition",
    "StructureReport",
    "StructureParser",
    "decompose",
    "pairs_from_dot_bracket",
    "to_dot_bracket",
    "FoldCache",
    "resolve_fold",
    "ClassicHairpinLayout",
    "FlatArcLayout",
    "LayoutEngine",
    "ModeSelector",
    "backbone_path",
    "compute_layout",
    "linear_layout",
    "view_box",
    "RiskClassifier",
    "classify",
    "energy_band",
    "analyze",
    "analyze_with_oracle",
]
