#!/usr/bin/env python3
"""
Main pipeline module for the hairpin layout engine.

This module ties the parser, layout strategies and risk classifier together
and provides the command line entry point.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as loguru_logger

from .config import LayoutConfig
from .core.fold import FoldCache, FoldOracle
from .core.parser import StructureParser, pairs_from_dot_bracket
from .exceptions import HairpinLayoutError
from .layout.selector import LayoutEngine
from .models import FoldResult, StructureReport
from .risk.classifier import RiskClassifier


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )
    loguru_logger.remove()
    loguru_logger.add(sys.stderr, level=log_level.upper())


def analyze(
    sequence: str,
    fold: FoldResult,
    config: Optional[LayoutConfig] = None,
    mode: str = "auto",
) -> StructureReport:
    """
    Build the layout and severity for one folded sequence.

    Args:
        sequence: Primer sequence
        fold: Folding oracle result for the sequence
        config: Layout configuration
        mode: ``auto``, ``classic`` or ``flat``

    Returns:
        StructureReport with decomposition, layout and severity
    """
    config = config or LayoutConfig()
    logger = logging.getLogger(__name__)

    decomposition = StructureParser(sequence).decompose(fold.base_pairs)
    layout = LayoutEngine(config).compute(sequence, decomposition, mode=mode)
    severity = RiskClassifier(config.critical_region).classify(
        fold.energy, fold.base_pairs, len(sequence)
    )

    logger.info(
        f"{len(sequence)} bases, {len(fold.base_pairs)} pairs, "
        f"dG={fold.energy:.2f}: {layout.mode.value} layout, {severity.tier.value}"
    )

    return StructureReport(
        sequence=sequence,
        fold=fold,
        decomposition=decomposition,
        layout=layout,
        severity=severity,
    )


def analyze_with_oracle(
    sequence: str,
    oracle: FoldOracle,
    config: Optional[LayoutConfig] = None,
    cache: Optional[FoldCache] = None,
    mode: str = "auto",
) -> StructureReport:
    """Fold ``sequence`` through ``oracle`` (cached) and analyze the result."""
    config = config or LayoutConfig()
    if cache is None:
        cache = FoldCache(oracle, config.min_fold_length, config.fold_cache_size)
    fold = cache.get(sequence, config.temperature)
    return analyze(sequence, fold, config, mode)


def main(argv=None) -> None:
    """Main entry point for command line interface."""
    parser = argparse.ArgumentParser(
        description="Hairpin layout - lay out a primer secondary structure and rate its 3' risk"
    )

    parser.add_argument(
        "sequence",
        help="Primer sequence (5' to 3')"
    )

    parser.add_argument(
        "-s", "--structure",
        default=None,
        help="Dot-bracket structure from the folding tool (default: unpaired)"
    )

    parser.add_argument(
        "-e", "--energy",
        type=float,
        default=0.0,
        help="Fold free energy in kcal/mol (default: 0.0)"
    )

    parser.add_argument(
        "-m", "--mode",
        choices=["auto", "classic", "flat"],
        default="auto",
        help="Layout mode (default: auto)"
    )

    parser.add_argument(
        "--width",
        type=float,
        default=None,
        help="Canvas width (default: 420)"
    )

    parser.add_argument(
        "--height",
        type=float,
        default=None,
        help="Canvas height (default: 380)"
    )

    parser.add_argument(
        "--critical-region",
        type=int,
        default=None,
        help="Number of 3' bases treated as critical (default: 10)"
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="YAML configuration file"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write JSON report to this file instead of stdout"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)

    try:
        base = LayoutConfig.from_yaml(args.config) if args.config else None
        config = LayoutConfig.from_args(vars(args), base=base)

        sequence = args.sequence.strip().upper()
        structure = args.structure or "." * len(sequence)
        if len(structure) != len(sequence):
            raise HairpinLayoutError(
                f"Structure length {len(structure)} does not match sequence length {len(sequence)}"
            )

        fold = FoldResult(energy=args.energy, base_pairs=pairs_from_dot_bracket(structure))
        report = analyze(sequence, fold, config, args.mode)
    except HairpinLayoutError as e:
        logging.error(f"Layout failed: {e}")
        sys.exit(1)

    payload = json.dumps(report.to_dict(), indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload + "\n")
        logging.info(f"Wrote report to {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
