"""
Classic stem-loop layout.

Draws the stem as two vertical rails with the loop on an arc above the
innermost pair. Spacing between stem levels grows with the bulges between
them, so both bases of a pair always share the same Y and bulge bases are
spread evenly through the stretched gap.
"""

import math
from typing import Dict, List, Optional, Tuple

from loguru import logger

from ..config import LayoutConfig
from ..models import Bounds, LayoutNode, StructureDecomposition
from .flat import linear_layout


class ClassicHairpinLayout:
    """Row-based hairpin layout for simple nested stems."""

    start_angle = math.pi * 0.85
    end_angle = math.pi * 0.15

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def level_positions(self, decomposition: StructureDecomposition) -> List[float]:
        """Y coordinate of every stem level, outermost first."""
        heights = decomposition.segment_heights
        count = len(decomposition.stem_pairs)
        ys = [0.0] * count
        ys[count - 1] = self.config.top_offset

        for level in range(count - 2, -1, -1):
            ys[level] = ys[level + 1] + heights[level] * self.config.unit_spacing

        return ys

    def loop_radius(self, decomposition: StructureDecomposition) -> float:
        return max(self.config.min_radius, decomposition.loop_len * self.config.per_base_radius)

    def loop_anchor(self, bounds: Bounds) -> Tuple[float, float]:
        """Centre of the loop arc; the placeholder spot for a closed loop."""
        return bounds.center_x, self.config.top_offset - self.config.loop_gap

    def layout(
        self,
        sequence: str,
        decomposition: Optional[StructureDecomposition],
        bounds: Bounds,
    ) -> List[LayoutNode]:
        """Place every base of ``sequence``; one node per index."""
        if decomposition is None:
            return linear_layout(sequence, bounds, self.config)

        cfg = self.config
        left_x = bounds.center_x - cfg.stem_width / 2
        right_x = bounds.center_x + cfg.stem_width / 2

        level_ys = self.level_positions(decomposition)
        stem_bottom = level_ys[0]
        pair_y: Dict[int, float] = {}
        for level, pair in enumerate(decomposition.stem_pairs):
            pair_y[pair.i] = level_ys[level]
            pair_y[pair.j] = level_ys[level]

        loop_start, loop_end = decomposition.loop_region
        loop_len = decomposition.loop_len
        radius = self.loop_radius(decomposition)
        anchor_x, anchor_y = self.loop_anchor(bounds)
        first = decomposition.first_paired
        last = decomposition.last_paired
        inner = decomposition.inner_pair

        logger.debug(f"Classic layout: levels={level_ys} loop_len={loop_len} radius={radius}")

        nodes = []
        for i, base in enumerate(sequence):
            partner = decomposition.partner(i)

            if i < first:
                x = left_x
                y = stem_bottom + (decomposition.tail5_len - i) * cfg.unit_spacing
            elif i > last:
                x = right_x
                y = stem_bottom + (i - last) * cfg.unit_spacing
            elif partner is not None:
                x = left_x if i < partner else right_x
                y = pair_y[i]
            elif loop_start <= i <= loop_end:
                step = (i - loop_start + 0.5) / loop_len
                angle = self.start_angle - (self.start_angle - self.end_angle) * step
                x = anchor_x + math.cos(angle) * radius
                y = anchor_y - math.sin(angle) * radius * cfg.loop_flatten
            else:
                on_left = i < (inner.i + inner.j) / 2
                x = left_x if on_left else right_x
                y = self._bulge_y(i, on_left, decomposition, level_ys)

            nodes.append(LayoutNode(sequence_index=i, base=base, x=x, y=y))

        return nodes

    def _bulge_y(
        self,
        index: int,
        on_left: bool,
        decomposition: StructureDecomposition,
        level_ys: List[float],
    ) -> float:
        """Interpolate an unpaired stem base between its enclosing levels.

        On the left strand index grows toward the loop (Y shrinks); on the
        right strand index grows away from it (Y grows).
        """
        pairs = decomposition.stem_pairs
        strand = [(level, pair.i if on_left else pair.j) for level, pair in enumerate(pairs)]
        before = [(idx, level) for level, idx in strand if idx < index]
        after = [(idx, level) for level, idx in strand if idx > index]

        if not before or not after:
            # Irregular topology: sit on the nearest level of this strand.
            idx, level = max(before) if before else min(after)
            return level_ys[level]

        lo_idx, lo_level = max(before)
        hi_idx, hi_level = min(after)
        run = [k for k in range(lo_idx + 1, hi_idx) if not decomposition.is_paired(k)]
        position = run.index(index)
        total = len(run)

        if on_left:
            lower_y, upper_y = level_ys[lo_level], level_ys[hi_level]
            t = (position + 1) / (total + 1)
        else:
            upper_y, lower_y = level_ys[lo_level], level_ys[hi_level]
            t = (total - position) / (total + 1)

        return lower_y + (upper_y - lower_y) * t
