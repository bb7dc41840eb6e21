import bisect

import numpy as np

from .searches import NOT_FOUND, search_bisect, search_full_scan, search_stride
from .utils import ProbeCounter, timed

METHODS = {
    "Full Scan": search_full_scan,
    "Binary Search": search_bisect,
    "Binary Stride": search_stride,
}

SUMMARY_HEADERS = ["Search Method", "Avg Time (µs)", "Avg Comparisons", "Success Rate"]


def _is_present(values: list[int], query: int) -> bool:
    i = bisect.bisect_left(values, query)
    return i < len(values) and values[i] == query


def _missing_value(values: list[int], rng: np.random.Generator) -> int:
    """Picks an integer that does not occur in `values`."""
    if not values:
        return int(rng.integers(0, 100))
    for _ in range(100):
        candidate = int(rng.integers(values[0] - 1, values[-1] + 1, endpoint=True))
        if not _is_present(values, candidate):
            return candidate
    return values[-1] + 1


def make_queries(values: list[int], num_runs: int, seed=None, miss_rate: float = 0.0) -> list[int]:
    """
    Draws `num_runs` search queries from `values`. Each query is replaced by a
    value absent from the data with probability `miss_rate`.
    """
    if num_runs < 1:
        raise ValueError(f"Number of runs must be at least 1, got {num_runs}")
    if not 0.0 <= miss_rate <= 1.0:
        raise ValueError(f"Miss rate must lie in [0, 1], got {miss_rate}")

    rng = np.random.default_rng(seed)
    queries = []
    for _ in range(num_runs):
        if values and rng.random() >= miss_rate:
            queries.append(values[int(rng.integers(len(values)))])
        else:
            queries.append(_missing_value(values, rng))
    return queries


def run_benchmark(values: list[int], num_runs: int, methods: dict | None = None, seed=None, miss_rate: float = 0.0) -> dict:
    """
    Runs every search method on the same random queries.
    Returns, per method name, the lists of search times (µs), element probes
    and successes. A search succeeds when it agrees with the data on whether the
    query is present and, if so, points at an element equal to it.
    """
    if methods is None:
        methods = METHODS
    queries = make_queries(values, num_runs, seed=seed, miss_rate=miss_rate)

    all_results = {name: {'times': [], 'comps': [], 'successes': []} for name in methods}
    counter = ProbeCounter(values)

    for query in queries:
        present = _is_present(values, query)
        for name, search in methods.items():
            counter.reset()
            found_idx, elapsed = timed(search, counter, query)

            if found_idx == NOT_FOUND:
                success = not present
            else:
                success = present and values[found_idx] == query

            all_results[name]['times'].append(elapsed)
            all_results[name]['comps'].append(counter.probes)
            all_results[name]['successes'].append(success)

    return all_results


def summarize(all_results: dict) -> list[list[str]]:
    """Averages the raw benchmark results into table rows (see SUMMARY_HEADERS)."""
    table_data = []
    for name, data in all_results.items():
        avg_time = np.mean(data['times']) if data['times'] else 0
        avg_comps = np.mean(data['comps']) if data['comps'] else 0
        success_rate = np.mean(data['successes']) * 100 if data['successes'] else 0
        table_data.append([name, f"{avg_time:.2f}", f"{avg_comps:.2f}", f"{success_rate:.1f}%"])
    return table_data


def crossover_trace(values, predicate) -> list[tuple[int, int]]:
    """
    Replays the stride loop of search_crossover and records (stride, pos)
    after each stride round, showing how the jumps decay towards the crossover.
    """
    n = len(values)
    trace = []
    pos = 0
    stride = n // 2
    while stride >= 1:
        while pos + stride < n and predicate(values[pos + stride]) <= 0:
            pos += stride
        trace.append((stride, pos))
        stride //= 2
    return trace
