import sys
import argparse
import numpy as np
from tabulate import tabulate

from binary_stride_exercise.searches import NOT_FOUND, search_bisect, search_stride, search_crossover
from binary_stride_exercise.benchmark import METHODS, SUMMARY_HEADERS, run_benchmark, summarize, crossover_trace
from binary_stride_exercise.data_loader import DISTRIBUTIONS, SAMPLE_ARRAYS, SAMPLE_NEEDLES, generate_dataset


def show_samples():
    """Runs both searches on the fixed sample arrays and prints what they return."""
    print("--- Sample Arrays ---")
    headers = ["Array", "Needle", "Bisect", "Stride", "Element at Stride"]
    table_data = []
    for needle in SAMPLE_NEEDLES:
        for array in SAMPLE_ARRAYS:
            idx_bisect = search_bisect(array, needle)
            idx_stride = search_stride(array, needle)
            element = array[idx_stride] if idx_stride != NOT_FOUND else "-"
            table_data.append([str(array), needle, idx_bisect, idx_stride, element])
    print(tabulate(table_data, headers=headers, tablefmt="grid"))


def show_crossover(n: int):
    """Uses the crossover search as an integer square root: the last x with x*x <= n."""
    print(f"\n--- Crossover Search: integer square root of {n} ---")
    domain = range(n + 1)
    predicate = lambda x: x * x - n

    root = search_crossover(domain, predicate)
    print(f"Largest x with x*x <= {n}: {root}")
    print(tabulate(crossover_trace(domain, predicate), headers=["Stride", "Position"], tablefmt="grid"))


def run_exercise(dataset_size: int, num_runs: int, distribution: str, miss_rate: float, seed, full_scan: bool):
    """
    Prints the sample results, a crossover example, and the benchmark results
    of the search methods averaged over random queries.
    """
    if dataset_size < 0:
        raise ValueError(f"Dataset size must be non-negative, got {dataset_size}")

    print("--- Binary Search vs Binary Stride ---\n")

    show_samples()
    show_crossover(dataset_size)

    # 1. Generate data
    print(f"\n1. Generating {dataset_size} {distribution} data points...")
    values = generate_dataset(distribution, dataset_size, seed=seed)

    methods = dict(METHODS)
    if not full_scan:
        del methods["Full Scan"]

    # 2. Benchmark
    print(f"2. Running benchmarks over {num_runs} random queries (miss rate {miss_rate:.0%})...")
    all_results = run_benchmark(values, num_runs, methods=methods, seed=seed, miss_rate=miss_rate)

    print("\n\n--- Final Averaged Benchmark Results ---")
    print(tabulate(summarize(all_results), headers=SUMMARY_HEADERS, tablefmt="grid"))

    print("\nAnalysis:")
    print(f"Averaged over {num_runs} random search queries on a dataset of {len(values)} points.")
    print(f"Binary Search averages {np.mean(all_results['Binary Search']['comps']):.2f} comparisons, "
          f"Binary Stride averages {np.mean(all_results['Binary Stride']['comps']):.2f}.")
    print("-" * 80)


def main(argv=None):
    # Configuration
    parser = argparse.ArgumentParser(description="Compare binary search and binary stride on sorted data.")
    parser.add_argument("--dataset-size", type=int, default=100000,
                        help="Number of data points to generate.")
    parser.add_argument("--num-runs", type=int, default=100,
                        help="Number of random search queries to average over.")
    parser.add_argument("--distribution", choices=DISTRIBUTIONS, default="uniform",
                        help="Shape of the generated data.")
    parser.add_argument("--miss-rate", type=float, default=0.1,
                        help="Fraction of queries that look for a value absent from the data.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for data generation and query selection.")
    parser.add_argument("--full-scan", action="store_true",
                        help="Also benchmark the linear scan (slow for large datasets).")
    args = parser.parse_args(argv)

    try:
        run_exercise(args.dataset_size, args.num_runs, args.distribution, args.miss_rate, args.seed, args.full_scan)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
