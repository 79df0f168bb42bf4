"""Tests for the classic stem-loop layout."""

import math

import pytest

from hairpin_layout.config import LayoutConfig
from hairpin_layout.core.parser import decompose
from hairpin_layout.layout.classic import ClassicHairpinLayout
from hairpin_layout.models import Bounds

BOUNDS = Bounds(width=420, height=380)


def _layout(sequence, pairs, config=None):
    decomposition = decompose(sequence, pairs)
    return ClassicHairpinLayout(config).layout(sequence, decomposition, BOUNDS), decomposition


def test_scenario_a_pair_rows():
    """Five stacked pairs share rows; inner rows sit above outer rows."""
    sequence = "GCGCGAAAAAAAAAACGCGC"
    nodes, _ = _layout(sequence, [[0, 19], [1, 18], [2, 17], [3, 16], [4, 15]])

    assert len(nodes) == 20
    assert nodes[0].y == nodes[19].y
    assert nodes[4].y == nodes[15].y
    assert nodes[4].y < nodes[0].y
    assert nodes[4].y == 130
    assert nodes[0].y == 130 + 4 * 34


def test_rails():
    """5' strand on the left rail, 3' strand on the right rail."""
    sequence = "GCGCGAAAAAAAAAACGCGC"
    nodes, _ = _layout(sequence, [[0, 19], [1, 18], [2, 17], [3, 16], [4, 15]])

    assert nodes[0].x == 210 - 45
    assert nodes[19].x == 210 + 45


def test_one_node_per_index():
    sequence = "ATGCGCAAAAAAGCGCATTT"
    nodes, _ = _layout(sequence, [[2, 15], [3, 14], [4, 13]])

    assert [node.sequence_index for node in nodes] == list(range(len(sequence)))
    assert "".join(node.base for node in nodes) == sequence


def test_paired_rows_match_with_bulges():
    """Pair rows stay equal even when bulges stretch the stem."""
    structures = [
        ("A" * 13, [[0, 12], [1, 11], [4, 10], [5, 9]]),
        ("A" * 14, [[0, 13], [1, 12], [2, 8], [3, 7]]),
        ("A" * 24, [[2, 21], [3, 20], [6, 17], [7, 16], [8, 12]]),
    ]
    for sequence, pairs in structures:
        nodes, _ = _layout(sequence, pairs)
        for i, j in pairs:
            assert nodes[i].y == nodes[j].y


def test_levels_strictly_separated():
    sequence = "A" * 24
    nodes, decomposition = _layout(sequence, [[2, 21], [3, 20], [6, 17], [7, 16], [8, 12]])

    ys = [nodes[pair.i].y for pair in decomposition.stem_pairs]
    assert all(outer > inner for outer, inner in zip(ys, ys[1:]))


def test_left_bulge_moves_toward_loop():
    """Left strand: higher index sits closer to the loop (smaller Y)."""
    nodes, _ = _layout("A" * 13, [[0, 12], [1, 11], [4, 10], [5, 9]])

    # level ys: 300, 266, 164, 130
    assert nodes[1].y == pytest.approx(266)
    assert nodes[4].y == pytest.approx(164)
    assert nodes[2].y == pytest.approx(232)
    assert nodes[3].y == pytest.approx(198)
    assert nodes[2].x == nodes[1].x


def test_right_bulge_moves_away_from_loop():
    """Right strand: higher index sits further from the loop (larger Y)."""
    nodes, _ = _layout("A" * 14, [[0, 13], [1, 12], [2, 8], [3, 7]])

    # level ys: 334, 300, 164, 130
    assert nodes[8].y == pytest.approx(164)
    assert nodes[12].y == pytest.approx(300)
    assert nodes[9].y == pytest.approx(198)
    assert nodes[10].y == pytest.approx(232)
    assert nodes[11].y == pytest.approx(266)
    assert nodes[9].x == nodes[8].x


def test_tails_walk_down_rails():
    sequence = "A" * 25
    nodes, _ = _layout(sequence, [[3, 20], [4, 19]])

    bottom = nodes[3].y
    assert nodes[2].y == pytest.approx(bottom + 34)
    assert nodes[0].y == pytest.approx(bottom + 3 * 34)
    assert nodes[0].x == nodes[3].x
    assert nodes[21].y == pytest.approx(bottom + 34)
    assert nodes[24].y == pytest.approx(bottom + 4 * 34)
    assert nodes[24].x == nodes[20].x


def test_loop_above_stem():
    sequence = "GCGCGAAAAAAAAAACGCGC"
    nodes, decomposition = _layout(sequence, [[0, 19], [1, 18], [2, 17], [3, 16], [4, 15]])

    top = nodes[4].y
    loop_nodes = [nodes[k] for k in decomposition.loop_indices]
    assert all(node.y < top for node in loop_nodes)
    # Loop runs from the left side over to the right side
    assert loop_nodes[0].x < loop_nodes[-1].x


def test_loop_radius():
    layout = ClassicHairpinLayout()
    small = decompose("GCGAACGC", [[0, 7], [1, 6], [2, 5]])
    large = decompose("GC" + "A" * 10 + "GC", [[0, 13], [1, 12]])

    assert small.loop_len == 2
    assert layout.loop_radius(small) == 50
    assert large.loop_len == 10
    assert layout.loop_radius(large) == 180


def test_zero_length_loop():
    """Closing pair with nothing between: no division by zero, no NaN."""
    sequence = "GCGCGC"
    nodes, _ = _layout(sequence, [[0, 5], [1, 4], [2, 3]])

    assert len(nodes) == 6
    assert all(not math.isnan(node.x) and not math.isnan(node.y) for node in nodes)
    assert nodes[2].y == nodes[3].y


def test_no_decomposition_falls_back_to_linear():
    sequence = "ACGTACGTAC"
    nodes = ClassicHairpinLayout().layout(sequence, None, BOUNDS)

    assert len(nodes) == 10
    assert nodes[0].x == 60
    assert nodes[-1].x == 360


def test_deterministic():
    """Identical inputs give identical coordinates."""
    sequence = "A" * 24
    pairs = [[2, 21], [3, 20], [6, 17], [7, 16], [8, 12]]
    first, _ = _layout(sequence, pairs)
    second, _ = _layout(sequence, pairs)

    assert first == second


def test_custom_spacing():
    config = LayoutConfig(unit_spacing=20, stem_width=60, top_offset=100)
    nodes, _ = _layout("GCGCAAAAGCGC", [[0, 11], [1, 10], [2, 9]], config)

    assert nodes[2].y == 100
    assert nodes[0].y == 140
    assert nodes[11].x - nodes[0].x == 60


def test_disjoint_stems_do_not_fail():
    """Two separate hairpins still get a node per base."""
    sequence = "A" * 20
    pairs = [[0, 8], [1, 7], [10, 19], [11, 18]]
    nodes, _ = _layout(sequence, pairs)

    assert len(nodes) == 20
    for i, j in pairs:
        assert nodes[i].y == nodes[j].y
    assert all(not math.isnan(node.y) for node in nodes)
