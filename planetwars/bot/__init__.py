"""Client kit for writing player programs."""

from .planet_wars import PlanetWars, run

__all__ = ["PlanetWars", "run"]
