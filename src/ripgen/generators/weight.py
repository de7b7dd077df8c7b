from __future__ import annotations

import random

WEIGHT_BOUND = 100


class WeightGenerator:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def generate_weight(self) -> int:
        # Rejects 0; a draw succeeds with p=0.99 so the loop ends almost surely.
        while True:
            weight = self.rng.randrange(WEIGHT_BOUND)
            if weight != 0:
                return weight
