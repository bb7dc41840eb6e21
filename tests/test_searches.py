"""
Unit tests for the search algorithms
"""
import sys
import warnings

import numpy as np
import pytest

from binary_stride_exercise.searches import (
    NOT_FOUND,
    element_at,
    midpoint,
    search_bisect,
    search_crossover,
    search_full_scan,
    search_stride,
)
from binary_stride_exercise.utils import ProbeCounter

SEARCHES = [search_bisect, search_stride, search_full_scan]


def random_sorted(rng, size, high):
    return np.sort(rng.integers(0, high, size=size)).tolist()


class TestStrideExamples:
    """Fixed examples from the binary stride walkthrough"""

    def test_single_element_found(self):
        assert search_stride([4], 4) == 0

    def test_single_element_missing(self):
        assert search_stride([4], 9) == NOT_FOUND

    @pytest.mark.parametrize("array, expected", [
        ([1, 4, 9], 1),
        ([1, 4], 1),
        ([4, 9], 0),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9], 3),
    ])
    def test_needle_four(self, array, expected):
        assert search_stride(array, 4) == expected

    @pytest.mark.parametrize("search", SEARCHES)
    def test_needle_smaller_than_all(self, search, one_to_nine):
        assert search(one_to_nine, 0) == NOT_FOUND

    @pytest.mark.parametrize("search", SEARCHES)
    def test_needle_larger_than_all(self, search, one_to_nine):
        assert search(one_to_nine, 14) == NOT_FOUND

    @pytest.mark.parametrize("search", SEARCHES)
    def test_every_element_found(self, search, one_to_nine):
        for i, value in enumerate(one_to_nine):
            assert search(one_to_nine, value) == i


class TestEmptySequence:
    """Searching an empty sequence must not touch any element"""

    @pytest.mark.parametrize("search", SEARCHES)
    def test_not_found_without_probes(self, search):
        counter = ProbeCounter([])
        assert search(counter, 4) == NOT_FOUND
        assert counter.probes == 0


class TestBisectStrideEquivalence:
    """Both searches agree on every ascending sequence"""

    @pytest.mark.parametrize("size, high", [(1, 5), (2, 5), (7, 4), (64, 1000), (100, 10), (257, 50)])
    def test_agree_on_random_sequences(self, rng, size, high):
        for _ in range(20):
            values = random_sorted(rng, size, high)
            for needle in range(-1, high + 1):
                i = search_bisect(values, needle)
                j = search_stride(values, needle)
                if i == NOT_FOUND or j == NOT_FOUND:
                    assert i == j == NOT_FOUND
                    assert needle not in values
                else:
                    assert values[i] == values[j] == needle

    def test_all_equal_elements(self):
        values = [7] * 10
        assert values[search_bisect(values, 7)] == 7
        # Stride only ever moves right over elements <= needle
        assert search_stride(values, 7) == 9
        assert search_bisect(values, 6) == search_stride(values, 6) == NOT_FOUND

    def test_stride_returns_last_duplicate(self):
        values = [1, 2, 2, 2, 3]
        assert search_stride(values, 2) == 3

    def test_bisect_is_deterministic(self):
        values = [1, 2, 2, 2, 2, 2, 3]
        assert search_bisect(values, 2) == search_bisect(values, 2)

    def test_numpy_array_input(self, rng):
        values = np.sort(rng.integers(0, 1000, size=500))
        for needle in values[::25]:
            assert values[search_bisect(values, needle)] == needle
            assert values[search_stride(values, needle)] == needle


class TestProbeBounds:
    """Searches only read indices inside [0, n-1]"""

    @pytest.mark.parametrize("search", [search_bisect, search_stride])
    def test_probes_stay_in_range(self, rng, search):
        for size in range(0, 40):
            counter = ProbeCounter(random_sorted(rng, size, 20))
            for needle in range(-2, 23):
                # ProbeCounter raises IndexError on any out-of-range read
                search(counter, needle)

    @pytest.mark.parametrize("search", [search_bisect, search_stride])
    def test_logarithmic_probe_count(self, search):
        counter = ProbeCounter(list(range(1 << 16)))
        search(counter, 12345)
        assert counter.probes <= 2 * 17 + 1


class TestMidpoint:
    """Midpoint arithmetic must not overflow fixed-width integers"""

    def test_small_values(self):
        assert midpoint(0, 8) == 4
        assert midpoint(3, 4) == 3
        assert midpoint(5, 5) == 5

    def test_int64_near_maximum(self):
        lo = np.int64(2**62)
        hi = np.int64(2**63 - 1)
        with warnings.catch_warnings(), np.errstate(over='raise'):
            warnings.simplefilter("error")
            mid = midpoint(lo, hi)
        assert lo <= mid <= hi
        assert int(mid) == 2**62 + (2**63 - 1 - 2**62) // 2

    def test_int64_random_large_bounds(self, rng):
        top = np.iinfo(np.int64).max
        with np.errstate(over='raise'):
            for _ in range(1000):
                lo, hi = np.sort(rng.integers(top // 2, top, size=2, endpoint=True))
                mid = midpoint(lo, hi)
                assert lo <= mid <= hi

    @pytest.mark.parametrize("search", [search_bisect, search_stride])
    def test_huge_virtual_sequence(self, search):
        values = range(sys.maxsize)
        for needle in (0, 1, sys.maxsize // 3, sys.maxsize - 2):
            assert search(values, needle) == needle
        assert search(values, -1) == NOT_FOUND
        assert search(values, sys.maxsize) == NOT_FOUND


class TestCrossover:
    """Crossover search over monotonic predicates"""

    @pytest.mark.parametrize("size", [1, 2, 3, 10, 64, 100, 1000])
    def test_injected_boundary(self, size):
        values = list(range(size))
        for boundary in range(size):
            assert search_crossover(values, lambda v: v - boundary) == boundary

    def test_predicate_never_positive(self):
        values = [1, 2, 3, 4, 5]
        counter = ProbeCounter(values)
        # Without the bounds guard the search would read past the end
        assert search_crossover(counter, lambda v: -1) == 4

    def test_single_element(self):
        assert search_crossover([5], lambda v: v - 10) == 0

    def test_integer_square_root(self):
        for n in (0, 1, 2, 15, 16, 17, 1000000):
            root = search_crossover(range(n + 1), lambda x: x * x - n)
            assert root * root <= n < (root + 1) * (root + 1)

    def test_float_predicate(self):
        values = [0.1 * i for i in range(50)]
        assert search_crossover(values, lambda v: v - 2.05) == 20

    def test_random_boundaries_with_duplicates(self, rng):
        for _ in range(50):
            values = random_sorted(rng, 200, 40)
            threshold = values[0] + int(rng.integers(0, 40))
            expected = max(i for i, v in enumerate(values) if v <= threshold)
            assert search_crossover(values, lambda v: v - threshold) == expected

    def test_empty_sequence_is_a_contract_violation(self):
        with pytest.raises(AssertionError):
            search_crossover([], lambda v: v)

    def test_non_monotonic_predicate_is_deterministic(self):
        values = list(range(20))
        predicate = lambda v: 1 if v % 3 == 0 and v > 0 else -1
        assert search_crossover(values, predicate) == search_crossover(values, predicate)


class TestElementAt:
    """Guarded access to search results"""

    def test_found_index(self, one_to_nine):
        assert element_at(one_to_nine, search_stride(one_to_nine, 4)) == 4

    def test_not_found_sentinel_raises(self, one_to_nine):
        with pytest.raises(IndexError):
            element_at(one_to_nine, search_stride(one_to_nine, 14))

    def test_out_of_range_raises(self, one_to_nine):
        with pytest.raises(IndexError):
            element_at(one_to_nine, 9)
        with pytest.raises(IndexError):
            element_at(one_to_nine, -2)
