# --- Search Algorithms over Sorted Sequences ---

from typing import Any, Callable, Sequence

NOT_FOUND = -1


def midpoint(lo: int, hi: int) -> int:
    """
    Midpoint of the closed interval [lo, hi].
    Uses the subtraction form so that fixed-width integers (e.g. numpy.int64)
    never overflow, unlike (lo + hi) // 2.
    """
    return lo + (hi - lo) // 2


def element_at(sequence: Sequence, index: int) -> Any:
    """
    Returns sequence[index], refusing the NOT_FOUND sentinel and any other
    out-of-range index instead of letting Python wrap negative indices.
    """
    if index == NOT_FOUND:
        raise IndexError("cannot read the element of a not-found result")
    if not 0 <= index < len(sequence):
        raise IndexError(f"index {index} out of range for sequence of length {len(sequence)}")
    return sequence[index]


def search_full_scan(sequence: Sequence, needle: Any) -> int:
    """
    Scans the sequence from the left.
    Returns the index of the first element equal to the needle, or NOT_FOUND.
    """
    for i in range(len(sequence)):
        if sequence[i] == needle:
            return i
    return NOT_FOUND


def search_bisect(sequence: Sequence, needle: Any) -> int:
    """
    Classic binary search on the closed interval [lo, hi].
    Returns the index of an element equal to the needle, or NOT_FOUND.
    When duplicates exist, which of them is returned depends on the probing order.
    """
    lo, hi = 0, len(sequence) - 1
    while lo <= hi:
        mid = midpoint(lo, hi)
        value = sequence[mid]
        if value == needle:
            return mid
        elif value < needle:
            lo = mid + 1
        else:
            hi = mid - 1
    return NOT_FOUND


def search_stride(sequence: Sequence, needle: Any) -> int:
    """
    Binary stride search.
    Walks from the left with jumps of n/2, n/4, ..., 1, only jumping onto
    elements that are <= needle. Once the stride is exhausted, pos holds the
    last element <= needle, so the needle is either there or absent.
    Returns the index of an element equal to the needle (the last one when
    duplicates exist), or NOT_FOUND.
    """
    n = len(sequence)
    if n == 0:
        return NOT_FOUND

    pos = 0
    stride = n // 2
    while stride >= 1:
        while pos + stride < n and sequence[pos + stride] <= needle:
            pos += stride
        stride //= 2

    if sequence[pos] == needle:
        return pos
    return NOT_FOUND


def search_crossover(sequence: Sequence, predicate: Callable[[Any], float]) -> int:
    """
    Finds the crossover point of a monotonic predicate using binary stride.

    The predicate must be <= 0 for sequence[0] and change sign at most once,
    from non-positive to positive, along the sequence. Under that contract the
    result is the greatest index pos with predicate(sequence[pos]) <= 0. A
    predicate that breaks the contract gives a deterministic but meaningless
    index; this is not checked.

    Every probe is bounds-checked (pos + stride < n), so a predicate that stays
    non-positive up to the end returns n - 1 instead of reading past the end.
    """
    n = len(sequence)
    assert n >= 1, "crossover search needs a non-empty sequence"

    pos = 0
    stride = n // 2
    while stride >= 1:
        while pos + stride < n and predicate(sequence[pos + stride]) <= 0:
            pos += stride
        stride //= 2
    return pos
