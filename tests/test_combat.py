"""Tests for Phase 3: Battle Resolution."""

from planetwars.engine.combat import process_combat, resolve_battle
from planetwars.models import Fleet, GameState, Planet


def create_game(owner: int, ships: int, fleets: list[Fleet]) -> GameState:
    """Create a one-target game: planet 0 is the battlefield, planet 1 a source."""
    planets = [
        Planet(id=0, owner=owner, ships=ships, growth_rate=3, x=0, y=0),
        Planet(id=1, owner=0, ships=0, growth_rate=0, x=5, y=0),
    ]
    return GameState(planets=planets, fleets=fleets)


def arriving(owner: int, ships: int, dest: int = 0) -> Fleet:
    return Fleet(owner=owner, ships=ships, source=1, dest=dest, total_trip_length=5, turns_remaining=0)


def test_resolve_battle_single_contender():
    """Test a lone owner keeps everything."""
    result = resolve_battle({1: 10})
    assert result.winner == 1
    assert result.survivors == 10


def test_resolve_battle_decisive():
    """Test the largest force wins with the difference to the second."""
    result = resolve_battle({0: 3, 2: 8})
    assert result.winner == 2
    assert result.survivors == 5


def test_resolve_battle_three_way():
    """Test only the second largest force is subtracted."""
    result = resolve_battle({1: 4, 2: 10, 3: 7})
    assert result.winner == 2
    assert result.survivors == 3


def test_resolve_battle_tie_for_top():
    """Test an exact tie for the top leaves no winner and no ships."""
    result = resolve_battle({1: 5, 2: 5})
    assert result.winner is None
    assert result.survivors == 0


def test_resolve_battle_three_way_tie():
    """Test three equal forces tie regardless of order."""
    assert resolve_battle({3: 6, 1: 6, 2: 6}).winner is None
    assert resolve_battle({1: 6, 2: 6, 3: 6}).survivors == 0


def test_resolve_battle_tie_below_top():
    """Test a tie for second place does not stop the leader."""
    result = resolve_battle({1: 9, 2: 4, 3: 4})
    assert result.winner == 1
    assert result.survivors == 5


def test_resolve_battle_all_zero():
    """Test no ships at all is a tie."""
    result = resolve_battle({1: 0})
    assert result.winner is None
    assert result.survivors == 0


def test_single_contender_unchanged():
    """Test a planet with no arriving fleets is left alone."""
    game = create_game(owner=1, ships=10, fleets=[])

    game, events = process_combat(game)

    assert game.planets[0].owner == 1
    assert game.planets[0].ships == 10
    assert events == []


def test_exact_tie_keeps_owner():
    """Test a tie empties the planet but keeps its owner."""
    game = create_game(owner=1, ships=5, fleets=[arriving(owner=2, ships=5)])

    game, events = process_combat(game)

    assert game.planets[0].owner == 1
    assert game.planets[0].ships == 0
    assert game.fleets == []
    assert events[0].owner_before == 1
    assert events[0].owner_after == 1


def test_decisive_battle_takes_neutral_planet():
    """Test a larger fleet captures a neutral planet."""
    game = create_game(owner=0, ships=3, fleets=[arriving(owner=2, ships=8)])

    game, events = process_combat(game)

    assert game.planets[0].owner == 2
    assert game.planets[0].ships == 5
    assert events[0].contenders == {0: 3, 2: 8}


def test_reinforcements_join_garrison():
    """Test a fleet arriving at its owner's planet adds to the garrison."""
    game = create_game(owner=1, ships=10, fleets=[arriving(owner=1, ships=4)])

    game, _ = process_combat(game)

    assert game.planets[0].owner == 1
    assert game.planets[0].ships == 14


def test_fleets_of_same_owner_are_pooled():
    """Test several arriving fleets of one owner fight as one force."""
    game = create_game(
        owner=1,
        ships=10,
        fleets=[arriving(owner=2, ships=6), arriving(owner=2, ships=6), arriving(owner=3, ships=11)],
    )

    game, events = process_combat(game)

    assert events[0].contenders == {1: 10, 2: 12, 3: 11}
    assert game.planets[0].owner == 2
    assert game.planets[0].ships == 1


def test_fleets_in_flight_are_kept():
    """Test only arrived fleets are consumed."""
    in_flight = Fleet(owner=2, ships=9, source=1, dest=0, total_trip_length=5, turns_remaining=2)
    game = create_game(owner=1, ships=10, fleets=[in_flight, arriving(owner=2, ships=3)])

    game, _ = process_combat(game)

    assert game.fleets == [in_flight]
    assert game.planets[0].ships == 7


def test_killed_fleet_is_discarded():
    """Test a killed fleet disappears without fighting."""
    killed = arriving(owner=2, ships=8)
    killed.kill()
    game = create_game(owner=0, ships=0, fleets=[killed])

    game, events = process_combat(game)

    assert game.fleets == []
    assert events == []
    assert game.planets[0].owner == 0
    assert game.planets[0].ships == 0


def test_battles_are_resolved_per_planet():
    """Test fleets only fight at their own destination."""
    game = create_game(
        owner=1, ships=2, fleets=[arriving(owner=2, ships=5, dest=0), arriving(owner=3, ships=4, dest=1)]
    )

    game, events = process_combat(game)

    assert [e.planet_id for e in events] == [0, 1]
    assert (game.planets[0].owner, game.planets[0].ships) == (2, 3)
    assert (game.planets[1].owner, game.planets[1].ships) == (3, 4)
