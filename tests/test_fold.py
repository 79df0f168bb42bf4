"""Tests for the folding oracle adapter and cache."""

from hairpin_layout.core.fold import FoldCache, consolidate, resolve_fold
from hairpin_layout.models import BasePair, FoldResult


class RecordingOracle:
    """Fake oracle that remembers every call."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, sequence, temperature):
        self.calls.append((sequence, temperature))
        return self.result


def test_short_sequences_skip_oracle():
    oracle = RecordingOracle({"e": -9.0, "ij": [[0, 4]]})

    for length in range(6):
        assert resolve_fold("A" * length, 55.0, oracle) == FoldResult.empty()

    assert oracle.calls == []


def test_mapping_result():
    oracle = RecordingOracle({"e": -4.1, "ij": [[0, 9], [1, 8]], "desc": "HAIRPIN"})
    result = resolve_fold("GCGAAAATCGC", 55.0, oracle)

    assert result.energy == -4.1
    assert result.base_pairs == (BasePair(0, 9), BasePair(1, 8))
    assert result.descriptor == "HAIRPIN"
    assert oracle.calls == [("GCGAAAATCGC", 55.0)]


def test_oracle_failure_falls_back():
    def broken(sequence, temperature):
        raise RuntimeError("energy tables missing")

    assert resolve_fold("ACGTACGTAC", 37.0, broken) == FoldResult.empty()


def test_malformed_output_falls_back():
    oracle = RecordingOracle({"e": "unstable", "ij": []})
    assert resolve_fold("ACGTACGTAC", 37.0, oracle) == FoldResult.empty()

    oracle = RecordingOracle(None)
    assert resolve_fold("ACGTACGTAC", 37.0, oracle) == FoldResult.empty()


def test_consolidate_structures():
    structures = [
        {"e": -1.234, "ij": [[0, 9]], "desc": "HAIRPIN:(0,9)"},
        {"e": -2.0, "ij": [[1, 8], [3, 3], [2, 50]], "desc": "STACK"},
    ]
    result = consolidate("A" * 10, structures)

    assert result.energy == -3.23
    assert result.base_pairs == (BasePair(0, 9), BasePair(1, 8))
    assert result.descriptor == "HAIRPIN"


def test_list_result_is_consolidated():
    oracle = RecordingOracle([{"e": -1.0, "ij": [[0, 9]]}, {"e": -1.5, "ij": [[1, 8]]}])
    result = resolve_fold("A" * 10, 55.0, oracle)

    assert result.energy == -2.5
    assert len(result.base_pairs) == 2


def test_empty_structure_list():
    assert consolidate("A" * 10, []) == FoldResult.empty()


def test_cache_reuses_results():
    oracle = RecordingOracle({"e": -2.0, "ij": [[0, 9]]})
    cache = FoldCache(oracle)

    first = cache.get("ACGTACGTAC", 55)
    second = cache.get("ACGTACGTAC", 55.0)

    assert first is second
    assert len(oracle.calls) == 1
    assert cache.info().hits == 1


def test_cache_keys_on_temperature():
    oracle = RecordingOracle({"e": -2.0, "ij": [[0, 9]]})
    cache = FoldCache(oracle)

    cache.get("ACGTACGTAC", 55.0)
    cache.get("ACGTACGTAC", 37.0)

    assert len(cache) == 2
    assert len(oracle.calls) == 2

    cache.clear()
    assert len(cache) == 0


def test_cache_is_bounded():
    oracle = RecordingOracle({"e": -2.0, "ij": [[0, 9]]})
    cache = FoldCache(oracle, maxsize=2)

    for temperature in (37.0, 45.0, 55.0):
        cache.get("ACGTACGTAC", temperature)

    assert len(cache) == 2
    assert cache.info().maxsize == 2

    # Oldest entry was evicted, so the oracle runs again
    cache.get("ACGTACGTAC", 37.0)
    assert len(oracle.calls) == 4
