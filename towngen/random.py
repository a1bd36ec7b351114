"""
Seeded random number generator
"""
import math
import time


class Random:
    """Linear congruential generator (Park-Miller, multiplier 48271).

    Every generation owns its own instance so that two models never share
    a random stream.
    """

    g = 48271
    n = 2147483647

    def __init__(self, seed=-1):
        self.seed = 1
        self.reset(seed)

    def reset(self, seed=-1):
        """Reset the stream; a non-positive seed derives one from the clock"""
        if seed > 0:
            self.seed = int(seed) % self.n or 1
        else:
            self.seed = int(time.time() * 1000) % self.n or 1
        return self

    def get_seed(self):
        return self.seed

    def _next(self):
        self.seed = (self.seed * self.g) % self.n
        return self.seed

    def float(self):
        """Random float in [0, 1)"""
        return self._next() / self.n

    def normal(self):
        """Average of three floats, a cheap bell curve"""
        return (self.float() + self.float() + self.float()) / 3

    def int(self, min_val, max_val):
        """Random integer in [min, max)"""
        return math.floor(min_val + self._next() / self.n * (max_val - min_val))

    def bool(self, chance=0.5):
        return self.float() < chance

    def fuzzy(self, f=1.0):
        """Blend between 0.5 (f=0) and normal() (f=1)"""
        if f == 0:
            return 0.5
        return (1 - f) / 2 + f * self.normal()
