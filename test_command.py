from climate import Earth
from command import CountryCommand
from conftest import make_netherlands
from effect import Effect


def test_apply_message():
    nl = make_netherlands()
    _, message = CountryCommand("Wave").apply(nl)
    assert message == "Wave successfully applied."

    _, message = CountryCommand("Wave", custom_apply_message="Hello!").apply(nl)
    assert message == "Hello!"


def test_not_enough_points_returns_original():
    nl = make_netherlands()
    command = CountryCommand("Climate conference", cost=100, effects=[Effect.extra_gdp(5)])
    result = nl.execute_command(command, Earth())
    assert not result.ok
    assert result.country is nl


def test_effects_then_cost():
    nl = make_netherlands(country_points=3)
    command = CountryCommand("Rally", effects=[Effect.free_points(5)], cost=3)
    result = nl.execute_command(command, Earth())
    assert result.ok
    assert result.country.country_points == 5
    assert result.message == "Rally successfully applied."


def test_apply_command_alias():
    nl = make_netherlands()
    command = CountryCommand("Free points", effects=[Effect.free_points(10)])
    assert nl.apply_command(command, Earth()).country.country_points == 11


def test_description_defaults():
    command = CountryCommand("Wave")
    assert command.description == "Wave"
    assert command.effect_description == "No effect"
