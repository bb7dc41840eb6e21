# --- Measurement Helpers ---

import time


class ProbeCounter:
    """
    Read-only view over a sequence that counts element accesses.
    Lets the search functions stay free of bookkeeping while the benchmark
    still reports how many comparisons each one made.
    """

    def __init__(self, sequence):
        self.sequence = sequence
        self.probes = 0

    def __len__(self):
        return len(self.sequence)

    def __getitem__(self, index):
        # Negative indices are rejected: a search must never wrap around.
        if not 0 <= index < len(self.sequence):
            raise IndexError(f"probe at index {index} outside [0, {len(self.sequence) - 1}]")
        self.probes += 1
        return self.sequence[index]

    def reset(self):
        self.probes = 0


def timed(func, *args):
    """
    Calls func(*args) and returns (result, elapsed time in microseconds).
    """
    start_time = time.perf_counter()
    result = func(*args)
    end_time = time.perf_counter()
    return result, (end_time - start_time) * 1e6
