"""Core processing modules for the hairpin layout engine."""

from .parser import StructureParser, decompose, innermost_pair, pairs_from_dot_bracket, to_dot_bracket
from .fold import FoldCache, consolidate, resolve_fold

__all__ = [
    "StructureParser",
    "decompose",
    "innermost_pair",
    "pairs_from_dot_bracket",
    "to_dot_bracket",
    "FoldCache",
    "consolidate",
    "resolve_fold",
]
