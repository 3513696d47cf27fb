# random_source.py

import threading
import numpy as np


class RandomSource:
    """
    A seedable uniform random generator shared by every drawable.

    NumPy Generators are not safe to draw from concurrently, so all draws go
    through a lock. No ordering is promised across threads; a single thread
    drawing from a seeded source always sees the same sequence.

    Data Contract:
    - Inputs:
        - seed (int | None): Master seed. None draws fresh OS entropy.
    - Outputs: Floats via random(), arrays via random(size).
    - Side Effects: Advances the wrapped generator's state.
    - Invariants: random() values lie in [0, 1).
    """
    def __init__(self, seed=None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def random(self, size=None):
        with self._lock:
            if size is None:
                return float(self._generator.random())
            return self._generator.random(size)

    def __repr__(self):
        return f"RandomSource(seed={self.seed})"
