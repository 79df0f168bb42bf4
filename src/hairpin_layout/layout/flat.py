"""Flat arc layout and the linear fallback."""

import math
from typing import List, Optional

from ..config import LayoutConfig
from ..models import ArcSegment, BasePair, Bounds, LayoutNode, StructureDecomposition


def linear_layout(
    sequence: str,
    bounds: Bounds,
    config: Optional[LayoutConfig] = None,
) -> List[LayoutNode]:
    """Gentle left-to-right arc used when there is no pairing to draw."""
    config = config or LayoutConfig()
    n = len(sequence)
    start_x = config.linear_margin
    end_x = bounds.width - config.linear_margin
    mid_y = bounds.height / 2

    nodes = []
    for i, base in enumerate(sequence):
        t = i / (n - 1) if n > 1 else 0.5
        x = start_x + t * (end_x - start_x)
        y = mid_y + math.sin(t * math.pi) * config.linear_amplitude
        nodes.append(LayoutNode(sequence_index=i, base=base, x=x, y=y))

    return nodes


class FlatArcLayout:
    """All bases on one baseline, each pair drawn as a half-ellipse above it.

    Makes no nesting assumptions, so disjoint stems, multi-loops and even
    crossing pairs lay out without error.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def canvas_width(self, sequence: str, bounds: Bounds) -> float:
        """Canvas widened so every base gets the full step."""
        cfg = self.config
        return max(bounds.width, len(sequence) * cfg.flat_max_base_width + 2 * cfg.flat_padding)

    def base_step(self, sequence: str, bounds: Bounds) -> float:
        cfg = self.config
        if not sequence:
            return cfg.flat_max_base_width
        usable = self.canvas_width(sequence, bounds) - 2 * cfg.flat_padding
        return min(cfg.flat_max_base_width, usable / len(sequence))

    def baseline(self, bounds: Bounds) -> float:
        return bounds.height - self.config.baseline_offset

    def layout(
        self,
        sequence: str,
        decomposition: Optional[StructureDecomposition],
        bounds: Bounds,
    ) -> List[LayoutNode]:
        """Place every base of ``sequence`` on the baseline."""
        step = self.base_step(sequence, bounds)
        y = self.baseline(bounds)
        return [
            LayoutNode(
                sequence_index=i,
                base=base,
                x=self.config.flat_padding + i * step + step / 2,
                y=y,
            )
            for i, base in enumerate(sequence)
        ]

    def arcs(self, nodes: List[LayoutNode], pairs) -> List[ArcSegment]:
        """One arc per pair; height follows span up to ``arc_max_height``."""
        cfg = self.config
        arcs = []
        for pair in pairs:
            if not isinstance(pair, BasePair):
                pair = BasePair.from_indices(pair[0], pair[1])
            if pair.i < 0 or pair.j >= len(nodes):
                continue

            x1 = nodes[pair.i].x
            x2 = nodes[pair.j].x
            arcs.append(ArcSegment(
                i=pair.i,
                j=pair.j,
                center_x=(x1 + x2) / 2,
                baseline_y=nodes[pair.i].y,
                rx=abs(x2 - x1) / 2,
                ry=min(cfg.arc_max_height, pair.span * cfg.arc_height_per_span),
            ))

        return arcs
