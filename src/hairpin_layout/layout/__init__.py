"""Layout strategies for the hairpin layout engine."""

from .classic import ClassicHairpinLayout
from .flat import FlatArcLayout, linear_layout
from .geometry import backbone_path, view_box
from .selector import LayoutEngine, ModeSelector, compute_layout

__all__ = [
    "ClassicHairpinLayout",
    "FlatArcLayout",
    "linear_layout",
    "backbone_path",
    "view_box",
    "LayoutEngine",
    "ModeSelector",
    "compute_layout",
]
