"""Layout mode selection and strategy dispatch."""

from typing import Optional, Union

from loguru import logger

from ..config import LayoutConfig
from ..exceptions import ConfigurationError
from ..models import Bounds, LayoutMode, LayoutResult, StructureDecomposition
from .classic import ClassicHairpinLayout
from .flat import FlatArcLayout, linear_layout


class ModeSelector:
    """Chooses between the classic stem-loop and the flat arc diagram."""

    def __init__(self, min_stem_pairs: int = 2, max_stem_pairs: int = 15):
        self.min_stem_pairs = min_stem_pairs
        self.max_stem_pairs = max_stem_pairs

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "ModeSelector":
        return cls(config.min_stem_pairs, config.max_stem_pairs)

    def choose(self, decomposition: Optional[StructureDecomposition]) -> LayoutMode:
        """Classic iff the stem has between min and max pairs."""
        if decomposition is None:
            return LayoutMode.FLAT
        if self.min_stem_pairs <= len(decomposition.stem_pairs) <= self.max_stem_pairs:
            return LayoutMode.CLASSIC
        return LayoutMode.FLAT

    def resolve(
        self,
        decomposition: Optional[StructureDecomposition],
        requested: Union[str, LayoutMode, None] = "auto",
    ) -> LayoutMode:
        """Honour an explicit mode toggle; ``auto`` defers to ``choose``."""
        if requested is None or requested == "auto":
            return self.choose(decomposition)

        try:
            mode = LayoutMode(requested)
        except ValueError:
            raise ConfigurationError(f"Unknown layout mode: {requested!r}", parameter="mode")
        if mode is LayoutMode.CLASSIC and decomposition is None:
            return LayoutMode.FLAT
        return mode


class LayoutEngine:
    """Runs the strategy picked by ModeSelector and packs a LayoutResult."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.selector = ModeSelector.from_config(self.config)
        self.strategies = {
            LayoutMode.CLASSIC: ClassicHairpinLayout(self.config),
            LayoutMode.FLAT: FlatArcLayout(self.config),
        }

    def compute(
        self,
        sequence: str,
        decomposition: Optional[StructureDecomposition],
        bounds: Optional[Bounds] = None,
        mode: Union[str, LayoutMode, None] = "auto",
    ) -> LayoutResult:
        """Lay out ``sequence``; a missing decomposition gives the linear fallback."""
        bounds = bounds or self.config.bounds
        chosen = self.selector.resolve(decomposition, mode)
        logger.debug(f"Layout mode {chosen.value} for {len(sequence)} bases")

        if decomposition is None:
            return LayoutResult(mode=chosen, nodes=tuple(linear_layout(sequence, bounds, self.config)))

        strategy = self.strategies[chosen]
        nodes = strategy.layout(sequence, decomposition, bounds)

        if chosen is LayoutMode.CLASSIC:
            return LayoutResult(
                mode=chosen,
                nodes=tuple(nodes),
                loop_anchor=strategy.loop_anchor(bounds),
            )

        return LayoutResult(
            mode=chosen,
            nodes=tuple(nodes),
            arcs=tuple(strategy.arcs(nodes, decomposition.stem_pairs)),
        )


def compute_layout(
    sequence: str,
    decomposition: Optional[StructureDecomposition],
    config: Optional[LayoutConfig] = None,
    mode: Union[str, LayoutMode, None] = "auto",
) -> LayoutResult:
    """Module-level shortcut for ``LayoutEngine(config).compute``."""
    return LayoutEngine(config).compute(sequence, decomposition, mode=mode)
