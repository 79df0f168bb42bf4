"""Data models for the hairpin layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import FoldError


class LayoutMode(Enum):
    """Diagram style chosen for a structure."""
    CLASSIC = "classic"
    FLAT = "flat"


class SeverityTier(Enum):
    """3' structure severity, ordered from harmless to blocking."""
    NONE = "none"
    INFO = "info"
    LOW = "low"
    MODERATE = "moderate"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class BasePair:
    """Pairing between two sequence positions, stored with i < j."""

    i: int
    j: int

    @classmethod
    def from_indices(cls, a: int, b: int) -> "BasePair":
        """Create from an unordered index pair."""
        a, b = int(a), int(b)
        return cls(min(a, b), max(a, b))

    @property
    def span(self) -> int:
        """Distance between the paired indices."""
        return self.j - self.i

    def as_tuple(self) -> Tuple[int, int]:
        return self.i, self.j

    def touches(self, start: int) -> bool:
        """Whether either end sits at or beyond ``start``."""
        return self.i >= start or self.j >= start


@dataclass(frozen=True)
class FoldResult:
    """Folding oracle output for one (sequence, temperature)."""

    energy: float = 0.0
    base_pairs: Tuple[BasePair, ...] = ()
    descriptor: str = ""

    @classmethod
    def empty(cls) -> "FoldResult":
        """Default result used for short sequences and oracle failures."""
        return cls(energy=0.0, base_pairs=(), descriptor="")

    @classmethod
    def from_dict(cls, data: Dict) -> "FoldResult":
        """Create from an oracle mapping (``energy``/``basePairs`` or ``e``/``ij``)."""
        energy = data.get("energy", data.get("e", 0.0))
        pairs = data.get("basePairs", data.get("base_pairs", data.get("ij"))) or []
        descriptor = data.get("descriptor", data.get("desc")) or ""

        try:
            energy = 0.0 if energy is None else float(energy)
            base_pairs = as_base_pairs(pairs)
        except (TypeError, ValueError, IndexError) as e:
            raise FoldError(f"Malformed fold result: {e}") from e

        return cls(energy=energy, base_pairs=base_pairs, descriptor=str(descriptor))

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "energy": self.energy,
            "basePairs": [list(p.as_tuple()) for p in self.base_pairs],
            "descriptor": self.descriptor,
        }


@dataclass(frozen=True)
class BulgeRun:
    """Unpaired bases between two adjacent stem levels."""

    level: int
    left_indices: Tuple[int, ...] = ()
    right_indices: Tuple[int, ...] = ()

    @property
    def left_count(self) -> int:
        return len(self.left_indices)

    @property
    def right_count(self) -> int:
        return len(self.right_indices)

    @property
    def segment_height(self) -> int:
        """Vertical units between level ``level`` and ``level + 1``."""
        return max(self.left_count, self.right_count) + 1


@dataclass(frozen=True)
class StructureDecomposition:
    """Stem, loop, bulge and tail breakdown of a pairing."""

    sequence_length: int
    stem_pairs: Tuple[BasePair, ...]
    inner_pair: BasePair
    loop_region: Tuple[int, int]
    tail5_len: int
    tail3_len: int
    bulges: Tuple[BulgeRun, ...] = ()
    _partners: Dict[int, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self):
        partners = {}
        for pair in self.stem_pairs:
            partners[pair.i] = pair.j
            partners[pair.j] = pair.i
        object.__setattr__(self, "_partners", partners)

    @property
    def loop_len(self) -> int:
        """Loop size, never below one so a closed loop keeps a placeholder slot."""
        start, end = self.loop_region
        return max(1, end - start + 1)

    @property
    def loop_indices(self) -> range:
        start, end = self.loop_region
        return range(start, end + 1)

    @property
    def first_paired(self) -> int:
        return self.tail5_len

    @property
    def last_paired(self) -> int:
        return self.sequence_length - 1 - self.tail3_len

    @property
    def segment_heights(self) -> List[int]:
        return [run.segment_height for run in self.bulges]

    @property
    def is_nested(self) -> bool:
        """True when every level sits strictly inside the one before it."""
        return all(
            outer.i < inner.i and inner.j < outer.j
            for outer, inner in zip(self.stem_pairs, self.stem_pairs[1:])
        )

    def partner(self, index: int) -> Optional[int]:
        return self._partners.get(index)

    def is_paired(self, index: int) -> bool:
        return index in self._partners

    def loop_sequence(self, sequence: str) -> str:
        start, end = self.loop_region
        return sequence[start:end + 1]

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "sequence_length": self.sequence_length,
            "stem_pairs": [list(p.as_tuple()) for p in self.stem_pairs],
            "inner_pair": list(self.inner_pair.as_tuple()),
            "loop_region": list(self.loop_region),
            "loop_len": self.loop_len,
            "tail5_len": self.tail5_len,
            "tail3_len": self.tail3_len,
            "segment_heights": self.segment_heights,
        }


@dataclass(frozen=True)
class Bounds:
    """Canvas size handed to a layout strategy."""

    width: float = 420.0
    height: float = 380.0

    @property
    def center_x(self) -> float:
        return self.width / 2


@dataclass(frozen=True)
class LayoutNode:
    """Placed nucleotide."""

    sequence_index: int
    base: str
    x: float
    y: float

    def to_dict(self) -> Dict:
        return {"sequenceIndex": self.sequence_index, "base": self.base, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class ArcSegment:
    """Half-ellipse drawn above the baseline for one base pair."""

    i: int
    j: int
    center_x: float
    baseline_y: float
    rx: float
    ry: float

    @property
    def apex(self) -> Tuple[float, float]:
        return self.center_x, self.baseline_y - self.ry

    def svg_path(self) -> str:
        """SVG elliptical-arc path from node ``i`` to node ``j``."""
        x1 = self.center_x - self.rx
        x2 = self.center_x + self.rx
        y = self.baseline_y
        return f"M {x1:.2f} {y:.2f} A {self.rx:.2f} {self.ry:.2f} 0 0 1 {x2:.2f} {y:.2f}"

    def to_dict(self) -> Dict:
        return {
            "i": self.i,
            "j": self.j,
            "centerX": self.center_x,
            "baselineY": self.baseline_y,
            "rx": self.rx,
            "ry": self.ry,
        }


@dataclass(frozen=True)
class LayoutResult:
    """Renderer-facing output: mode tag, one node per index, optional arcs."""

    mode: LayoutMode
    nodes: Tuple[LayoutNode, ...]
    arcs: Tuple[ArcSegment, ...] = ()
    loop_anchor: Optional[Tuple[float, float]] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> Dict:
        return {
            "mode": self.mode.value,
            "nodes": [node.to_dict() for node in self.nodes],
            "arcs": [arc.to_dict() for arc in self.arcs],
            "loopAnchor": list(self.loop_anchor) if self.loop_anchor else None,
        }


@dataclass(frozen=True)
class SeverityClassification:
    """3' end risk verdict for one structure."""

    tier: SeverityTier
    label: str
    message: str
    should_warn: bool
    short_label: str = ""
    energy: float = 0.0
    involves_3prime_stem: bool = False
    involves_3prime_loop: bool = False

    @property
    def action_required(self) -> bool:
        return self.tier is SeverityTier.CRITICAL

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            "tier": self.tier.value,
            "label": self.label,
            "shortLabel": self.short_label,
            "message": self.message,
            "shouldWarn": self.should_warn,
            "actionRequired": self.action_required,
            "energy": self.energy,
            "involves3PrimeStem": self.involves_3prime_stem,
            "involves3PrimeLoop": self.involves_3prime_loop,
        }


@dataclass(frozen=True)
class StructureReport:
    """Everything a renderer needs for one primer."""

    sequence: str
    fold: FoldResult
    decomposition: Optional[StructureDecomposition]
    layout: LayoutResult
    severity: SeverityClassification

    def to_dict(self) -> Dict:
        return {
            "sequence": self.sequence,
            "fold": self.fold.to_dict(),
            "decomposition": self.decomposition.to_dict() if self.decomposition else None,
            "layout": self.layout.to_dict(),
            "severity": self.severity.to_dict(),
        }


def as_base_pairs(pairs: Iterable) -> Tuple[BasePair, ...]:
    """Normalise ``[i, j]`` sequences or ``BasePair`` objects into a tuple."""
    if not pairs:
        return ()
    return tuple(
        pair if isinstance(pair, BasePair) else BasePair.from_indices(pair[0], pair[1])
        for pair in pairs
    )
