"""Starter strategy.

Run with ``python -m planetwars.bot.starter``. If no fleet of ours is in
flight, send half the ships of our strongest planet to the weakest planet
we do not own.
"""

from .planet_wars import PlanetWars, run


def do_turn(pw: PlanetWars) -> None:
    if pw.my_fleets():
        return

    my_planets = pw.my_planets()
    targets = pw.not_my_planets()
    if not my_planets or not targets:
        return

    source = max(my_planets, key=lambda p: p.ships)
    dest = min(targets, key=lambda p: p.ships)
    pw.issue_order(source, dest, source.ships // 2)


def main() -> None:
    run(do_turn)


if __name__ == "__main__":
    main()
