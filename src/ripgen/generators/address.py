from __future__ import annotations

import random

OCTET_BOUND = 255


class AddressAllocator:
    """Draws dotted-quad router addresses.

    Each octet is drawn from ``[0, 255)``. Nothing here checks for collisions;
    the generator compares every draw against its allocated-address set.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def generate_address(self) -> str:
        return ".".join(str(self.rng.randrange(OCTET_BOUND)) for _ in range(4))
