"""Planet data model."""

import math
from dataclasses import dataclass


@dataclass
class Planet:
    """Represents a planet on the map.

    Planets are the only places where ships are produced. Ids are assigned
    by order of appearance in the initial state and never change during a
    match. Position and growth rate are fixed; owner and ship count change
    through battles, order issuance and player drops.
    """

    id: int  # Dense 0-based id, fixed for the match
    owner: int  # 0 = neutral, >= 1 = player
    ships: int  # Ships stationed on the planet
    growth_rate: int  # Ships added per turn while owned by a player
    x: float
    y: float

    def __post_init__(self):
        """Validate planet data after initialization."""
        if self.id < 0:
            raise ValueError(f"Invalid id: {self.id} (must be >= 0)")
        if self.owner < 0:
            raise ValueError(f"Invalid owner: {self.owner} (must be >= 0)")
        if self.ships < 0:
            raise ValueError(f"Invalid ships: {self.ships} (must be >= 0)")
        if self.growth_rate < 0:
            raise ValueError(f"Invalid growth_rate: {self.growth_rate} (must be >= 0)")
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Invalid position: ({self.x}, {self.y}) (must be finite)")

    def add_ships(self, amount: int) -> None:
        self.ships += amount

    def remove_ships(self, amount: int) -> None:
        self.ships -= amount
