import random
from typing import MutableSequence, Optional


class RandomSource:
    """
    Seedable source for every stochastic choice the engine makes.
    Draw order is sequential, so a fixed seed reproduces a whole run.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randrange(self, start: int, stop: int = None) -> int:
        return self._rng.randrange(start, stop)

    def uniform(self, low: float, high: float) -> float:
        # random() is in [0, 1) so the result never reaches high.
        return low + (high - low) * self._rng.random()

    def shuffle(self, items: MutableSequence) -> None:
        n = len(items)
        while n > 1:
            k = self._rng.randrange(n)
            n -= 1
            items[k], items[n] = items[n], items[k]
