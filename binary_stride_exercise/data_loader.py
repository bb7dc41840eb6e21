import numpy as np
from scipy.stats import gaussian_kde

DEFAULT_MAX_VALUE = 2**32 - 1

DISTRIBUTIONS = ("uniform", "duplicates", "clustered", "bucketed")

# Fixed arrays and needles of the binary stride walkthrough
SAMPLE_ARRAYS = (
    [1, 2, 3, 4, 5, 6, 7, 8, 9],
    [1, 2, 3, 4, 5, 6, 7, 8, 9],
    [4],
    [1, 4, 9],
    [1, 4],
    [4, 9],
    [],
)
SAMPLE_NEEDLES = (4, 14, 0)


def _check_size(size: int):
    if size < 0:
        raise ValueError(f"Dataset size must be non-negative, got {size}")


def generate_uniform(size: int, max_value: int = DEFAULT_MAX_VALUE, seed=None) -> list[int]:
    """
    Generates `size` unique integers drawn uniformly from [0, max_value].
    Returns them as a sorted list.
    """
    _check_size(size)
    if size > max_value + 1:
        raise ValueError(f"Cannot draw {size} unique values from [0, {max_value}]")

    rng = np.random.default_rng(seed)
    values = np.unique(rng.integers(0, max_value, size=size, dtype=np.int64, endpoint=True))

    # Collisions are rare for large ranges, top up until we have enough
    while len(values) < size:
        extra = rng.integers(0, max_value, size=size - len(values), dtype=np.int64, endpoint=True)
        values = np.unique(np.concatenate([values, extra]))

    return values.tolist()


def generate_with_duplicates(size: int, distinct: int | None = None, seed=None) -> list[int]:
    """
    Generates sorted data drawn from only `distinct` keys (0 .. distinct-1),
    so long runs of equal elements appear. Defaults to size // 10 keys.
    """
    _check_size(size)
    if distinct is None:
        distinct = max(1, size // 10)
    if distinct < 1:
        raise ValueError(f"Number of distinct keys must be positive, got {distinct}")

    rng = np.random.default_rng(seed)
    return np.sort(rng.integers(0, distinct, size=size, dtype=np.int64)).tolist()


def generate_clustered(size: int, max_value: int = DEFAULT_MAX_VALUE, seed=None, clusters: int = 5) -> list[int]:
    """
    Generates skewed data by resampling a Kernel Density Estimate fitted on a
    handful of random cluster centers. Values are clipped to [0, max_value]
    and may repeat.
    """
    _check_size(size)
    if clusters < 2:
        raise ValueError(f"KDE needs at least 2 cluster centers, got {clusters}")
    if size == 0:
        return []

    rng = np.random.default_rng(seed)
    centers = rng.uniform(0, max_value, size=clusters)

    print(f"Generating {size} clustered points around {clusters} centers using KDE...")
    kde = gaussian_kde(centers, bw_method=0.1)
    samples = kde.resample(size=size, seed=rng)[0]

    samples = np.clip(samples, 0, max_value).astype(np.int64)
    return np.sort(samples).tolist()


def generate_bucketed(bucket_heights: list[float], size: int, max_value: int = DEFAULT_MAX_VALUE, seed=None) -> list[int]:
    """
    Generates histogram-shaped data: the value range is split into equal-width
    buckets and each bucket receives a share of the points proportional to its
    height. Values inside a bucket are uniform and may repeat.
    """
    _check_size(size)
    if not bucket_heights:
        raise ValueError("At least one bucket is required")
    if any(h < 0 for h in bucket_heights):
        raise ValueError("Bucket heights must be non-negative")

    if sum(bucket_heights) == 0:
        # Flat histogram, fall back to uniform
        bucket_heights = [1] * len(bucket_heights)

    probabilities = np.array(bucket_heights, dtype=np.float64) / sum(bucket_heights)
    num_buckets = len(bucket_heights)
    bucket_width = max(1, (max_value + 1) // num_buckets)

    points_per_bucket = np.round(size * probabilities).astype(np.int64)

    # Adjust for rounding errors on the most likely buckets
    diff = size - points_per_bucket.sum()
    if diff != 0:
        adjustment_indices = np.argsort(probabilities)[::-1][:abs(diff)]
        points_per_bucket[adjustment_indices] += np.sign(diff)

    rng = np.random.default_rng(seed)
    chunks = []
    for bucket_idx, count in enumerate(points_per_bucket):
        if count <= 0:
            continue
        bucket_start = min(bucket_idx * bucket_width, max_value)
        bucket_end = min((bucket_idx + 1) * bucket_width - 1, max_value)
        chunks.append(rng.integers(bucket_start, bucket_end, size=count, dtype=np.int64, endpoint=True))

    if not chunks:
        return []
    return np.sort(np.concatenate(chunks)).tolist()


def generate_dataset(distribution: str, size: int, seed=None, bucket_heights: list[float] | None = None) -> list[int]:
    """Builds a sorted dataset of the named distribution."""
    if distribution == "uniform":
        return generate_uniform(size, seed=seed)
    elif distribution == "duplicates":
        return generate_with_duplicates(size, seed=seed)
    elif distribution == "clustered":
        return generate_clustered(size, seed=seed)
    elif distribution == "bucketed":
        if bucket_heights is None:
            # Linear ramp: sparse at the low end, dense at the high end
            bucket_heights = list(range(1, 21))
        return generate_bucketed(bucket_heights, size, seed=seed)
    raise ValueError(f"Unknown distribution {distribution!r}, expected one of {', '.join(DISTRIBUTIONS)}")


def crossover_dataset(size: int, boundary: int, seed=None) -> tuple[list[int], int]:
    """
    Builds unique sorted values and a threshold such that the predicate
    `value - threshold` is <= 0 exactly up to index `boundary`.
    Returns (values, threshold).
    """
    if not 0 <= boundary < size:
        raise ValueError(f"Boundary {boundary} must lie in [0, {size - 1}]")
    values = generate_uniform(size, seed=seed)
    return values, values[boundary]
