"""
Test WorldSimulation

The earth advances on the summed emissions of every country, countries tick
24 times a year, and player actions go through the catalog with the
anti-tamper check.
"""

from dataclasses import replace

import pytest

from climate import Earth
from conftest import make_netherlands
from effect import TICKS_PER_YEAR
from errors import CatalogLookupFailure, CommandNotAvailable
from seed import load_countries
from simulation import WorldSimulation
from store import StateStore


def _world(**kwargs):
    countries = [make_netherlands(), make_netherlands(name="Elsewhere", country_code="XX",
                                                      base_yearly_emissions=9.88)]
    return WorldSimulation(Earth(), countries, **kwargs)


def test_earth_uses_aggregate_emissions():
    world = _world()
    assert world.aggregate_emissions == pytest.approx(10.34)

    earth = world.tick_earth()
    assert earth == Earth().tick(0.46 + 9.88)
    assert world.last_log_messages() == ["Welcome to 2016!"]


def test_run_ordering():
    world = _world()
    df = world.run(2)
    assert list(df["Year"]) == [2015, 2016, 2017]
    assert df["Temperature"].iloc[-1] > df["Temperature"].iloc[0]
    assert world.country("NL").country_points == 1 + 2 * TICKS_PER_YEAR
    assert world.last_log_messages(5) == ["Welcome to 2017!", "Welcome to 2016!"]


def test_countries_tick_in_current_earth():
    world = _world()
    world.tick_earth()
    nl_before = world.country("NL")
    world.tick_countries()
    assert world.country("NL") == nl_before.tick(world.earth)


def test_duplicate_country_codes():
    with pytest.raises(ValueError):
        WorldSimulation(Earth(), [make_netherlands(), make_netherlands()])


def test_execute_command():
    world = _world()
    result = world.execute_command("NL", world.catalog.command_named("Free points"))
    assert result.ok
    assert world.country("NL").country_points == 11
    assert world.last_log_messages(1) == ["Netherlands executed command 'Free points'."]


def test_tampered_command_is_rejected():
    world = _world()
    conference = world.catalog.command_named("Climate conference")
    with pytest.raises(CommandNotAvailable):
        world.execute_command("NL", replace(conference, cost=0))
    assert world.country("NL").country_points == 1
    assert world.last_log_messages() == []


def test_failed_actions_are_not_logged():
    world = _world()
    result = world.execute_command_named("NL", "Climate conference")
    assert not result.ok
    assert world.last_log_messages() == []


def test_policy_actions_by_name():
    world = _world()
    world.run(1)

    assert world.enact_policy("NL", "Subsidise fossil fuels").ok
    assert world.level_up_policy("NL", "Subsidise fossil fuels").ok
    assert world.country("NL").active_policy_named("Subsidise fossil fuels").level == 2
    assert world.revoke_policy("NL", "Subsidise fossil fuels").ok
    assert world.country("NL").active_policies == ()

    assert world.last_log_messages(3) == [
        "Netherlands revoked policy 'Subsidise fossil fuels'.",
        "Netherlands levelled up policy 'Subsidise fossil fuels'.",
        "Netherlands enacted policy 'Subsidise fossil fuels'.",
    ]

    with pytest.raises(CatalogLookupFailure):
        world.enact_policy("NL", "Build a moon base")
    with pytest.raises(KeyError):
        world.country("ZZ")


def test_policy_condition_is_enforced():
    world = WorldSimulation(Earth(), [make_netherlands(country_points=20)])
    nl = world.country("NL")
    assert "Increase base interest" not in [p.name for p in nl.enactable_policies(world.catalog)]

    result = world.enact_policy("NL", "Increase base interest")
    assert not result.ok
    assert result.country is nl
    assert world.country("NL").active_policies == ()
    assert world.country("NL").country_points == 20
    assert world.last_log_messages() == []

    # A policy whose condition holds still goes through
    assert world.enact_policy("NL", "Subsidise fossil fuels").ok


def test_store_backed_world(tmp_path):
    store = StateStore(str(tmp_path / "world.db"))
    world = _world(store=store, earth_id="test")
    world.run(1)
    world.enact_policy("NL", "Decrease base interest")

    resumed = WorldSimulation.from_store(store, "test")
    assert resumed.earth == world.earth
    assert resumed.country("NL") == world.country("NL")
    assert resumed.last_log_messages(1) == ["Netherlands enacted policy 'Decrease base interest'."]

    with pytest.raises(KeyError):
        WorldSimulation.from_store(store, "missing")


def test_seeded_world():
    countries = load_countries()
    assert sum(c.base_yearly_emissions for c in countries) == pytest.approx(10.34)

    world = WorldSimulation(Earth(), countries)
    df = world.run(3)
    assert len(df) == 4
    assert len(world.country_frame()) == len(countries)
